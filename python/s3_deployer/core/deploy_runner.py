"""デプロイ処理の実行"""
import os
import time
from datetime import date
from typing import List, Optional, Tuple

from ..models.config import AWSConfig, DeployConfig
from ..utils.logger import LoggerManager
from ..utils.file_utils import FileInfo, FileScanner
from ..utils.stamps import apply_datestamp, generate_timestamp
from .cleaner import RemoteCleaner
from .uploader import UploadCounters, UploadExecutor, ParallelUploadExecutor
from .s3_client import S3ClientManager


class DeployRunner:
    """バケットの削除（任意）→ アップロード → 集計 を順に実行"""

    def __init__(self, config: DeployConfig, s3_client=None, today: Optional[date] = None):
        self.config = config
        self.logger = LoggerManager.get_logger()

        if s3_client is None:
            aws_config = AWSConfig.from_file(config.config_path)
            s3_client = S3ClientManager(aws_config, config.options).get_client()
        self.s3_client = s3_client

        self.folder = apply_datestamp(config.folder, config.datestamp, today)
        self.dist_path = self._normalize_dist_path(config.dist_path)

        self.cleaner = RemoteCleaner(self.s3_client)
        self.executor = UploadExecutor(self.s3_client, config.options, config.acl)
        self.parallel_executor = ParallelUploadExecutor(
            self.executor,
            config.options.worker_count
        )
        self.file_scanner = FileScanner()

    @staticmethod
    def _normalize_dist_path(dist_path: str) -> str:
        """ディレクトリなら末尾に区切り文字を付ける

        パスが存在しない場合は削除処理より前にここで失敗させる。
        """
        if not os.path.exists(dist_path):
            raise FileNotFoundError(f"No such file or directory: {dist_path}")
        if os.path.isdir(dist_path) and not dist_path.endswith(("/", os.sep)):
            return dist_path + os.sep
        return dist_path

    def print_options(self):
        """実行時の設定を出力"""
        self.logger.info("Running S3 Bucket Upload script")
        self.logger.info("*** Options ***")
        for name, value in self.config.describe(self.folder, self.dist_path):
            self.logger.info(f"{name} = {value}")

    def run(self) -> UploadCounters:
        """デプロイを実行して集計結果を返す

        削除に失敗した場合は CleanError がそのまま送出され、アップロードは行わない。
        """
        started = time.monotonic()
        self.print_options()
        self.logger.info(f"{generate_timestamp()} Starting deploy process. - bucket: {self.config.bucket}")

        if self.config.empty:
            self.cleaner.empty_prefix(self.config.bucket, self.folder)

        counters = self.upload_production_files()
        self._print_stats(counters, time.monotonic() - started)
        return counters

    def upload_production_files(self) -> UploadCounters:
        """ファイル（またはディレクトリ）をアップロード"""
        self.logger.info(f"{generate_timestamp()} Starting to upload production files.")
        return self.parallel_executor.upload_files(self.collect_upload_tasks())

    def collect_upload_tasks(self) -> List[Tuple[FileInfo, str, str]]:
        """(FileInfo, bucket, s3_key) のリストを作成"""
        bucket = self.config.bucket

        if os.path.isdir(self.dist_path):
            prefix = self.folder
            if prefix != "" and not prefix.endswith("/"):
                prefix += "/"
            return [
                (file_info, bucket, prefix + file_info.key_path)
                for file_info in self.file_scanner.scan_directory(self.dist_path)
            ]

        file_info = self.file_scanner.get_file_info(self.dist_path)
        s3_key = file_info.name if self.folder == "" else f"{self.folder}/{file_info.name}"
        return [(file_info, bucket, s3_key)]

    def _print_stats(self, counters: UploadCounters, elapsed: float):
        self.logger.info(
            f"#Files: {counters.total}, #Uploaded: {counters.uploaded}, #Errors: {counters.failed}"
        )
        self.logger.info(
            f"{generate_timestamp()} Finished uploading production files. ({elapsed:.1f}s)"
        )
