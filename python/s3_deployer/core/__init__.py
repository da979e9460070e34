"""S3 Deployer コアモジュール"""
from .s3_client import S3ClientManager
from .cleaner import RemoteCleaner, CleanError
from .uploader import UploadExecutor, ParallelUploadExecutor, UploadCounters, UploadResult
from .deploy_runner import DeployRunner

__all__ = [
    'S3ClientManager',
    'RemoteCleaner',
    'CleanError',
    'UploadExecutor',
    'ParallelUploadExecutor',
    'UploadCounters',
    'UploadResult',
    'DeployRunner'
]
