"""S3 Deployer パッケージ"""
from .models.config import DeployConfig, UploadOptions, LoggingConfig
from .utils.logger import LoggerManager
from .core.deploy_runner import DeployRunner
from .core.uploader import UploadCounters

__version__ = "1.0.0"


class S3Deployer:
    """S3デプロイのメインクラス"""

    def __init__(self, config: DeployConfig, s3_client=None):
        self.config = config

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)
        self.logger.info("S3 Deployer initialized")

        self.runner = DeployRunner(self.config, s3_client=s3_client)

    def run(self) -> UploadCounters:
        """デプロイを実行"""
        return self.runner.run()


__all__ = ['S3Deployer', 'DeployConfig', 'UploadOptions', 'LoggingConfig', '__version__']
