"""S3アップロード実行クラス"""
from typing import Optional, Tuple, List
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor, as_completed

from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from ..models.config import UploadOptions
from ..utils.logger import LoggerManager
from ..utils.progress import ProgressTracker, ProgressDots
from ..utils.file_utils import FileInfo, file_size_in_mb, multipart_part_count
from ..utils.content_type import resolve_content_type
from .transfer import TransferConfigManager


@dataclass
class UploadResult:
    """アップロード結果"""
    file_path: str
    s3_key: str
    success: bool
    multipart: bool = False
    error: Optional[str] = None


@dataclass
class UploadCounters:
    """アップロード件数の集計"""
    total: int = 0
    uploaded: int = 0
    processed: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.uploaded

    @property
    def complete(self) -> bool:
        return self.processed == self.total

    def record(self, result: UploadResult):
        self.processed += 1
        if result.success:
            self.uploaded += 1


class UploadExecutor:
    """ファイルアップロードの実行"""

    def __init__(self, s3_client, options: UploadOptions, acl: str = "private"):
        self.s3_client = s3_client
        self.options = options
        self.acl = acl
        self.logger = LoggerManager.get_logger()

    def is_multipart(self, file_info: FileInfo) -> bool:
        """MB単位（切り上げ）のサイズが閾値以上ならマルチパート"""
        return file_size_in_mb(file_info.size) >= self.options.multipart_threshold_mb

    def upload_file(self, file_info: FileInfo, bucket: str, s3_key: str) -> UploadResult:
        """単一ファイルをアップロード（失敗しても例外は投げない）"""
        multipart = self.is_multipart(file_info)
        extra_args = {
            "ACL": self.acl,
            "ContentType": resolve_content_type(file_info.path, self.options.content_types),
        }

        try:
            if multipart:
                self._multipart_upload(file_info, bucket, s3_key, extra_args)
            else:
                self._single_upload(file_info, bucket, s3_key, extra_args)

            self.logger.debug(
                f"Uploaded {file_info.path} to {bucket}/{s3_key} as {extra_args['ContentType']}"
            )
            return UploadResult(file_info.path, s3_key, success=True, multipart=multipart)

        except (ClientError, BotoCoreError, S3UploadFailedError, OSError) as e:
            error = str(e)
        except Exception as e:
            error = f"Unexpected error: {e}"

        self.logger.error(f"Failed to upload {file_info.path} Error: {error}")
        return UploadResult(file_info.path, s3_key, success=False, multipart=multipart, error=error)

    def _single_upload(self, file_info: FileInfo, bucket: str, s3_key: str, extra_args: dict):
        """一回のPUTでアップロード"""
        with open(file_info.path, "rb") as body:
            self.s3_client.put_object(
                Bucket=bucket,
                Key=s3_key,
                Body=body,
                **extra_args
            )

    def _multipart_upload(self, file_info: FileInfo, bucket: str, s3_key: str, extra_args: dict):
        """閾値サイズのパートに分割してアップロード"""
        part_count = multipart_part_count(
            file_size_in_mb(file_info.size), self.options.multipart_threshold_mb
        )
        transfer_config = TransferConfigManager.create_config(self.options, part_count)

        progress_tracker = None
        if self.options.enable_progress:
            progress_tracker = ProgressTracker(
                s3_key, file_info.size, self.options.multipart_threshold_bytes
            )

        self.logger.info(
            f"Multipart upload of {file_info.path} ({part_count} parts) to {bucket}/{s3_key}"
        )
        self.s3_client.upload_file(
            file_info.path,
            bucket,
            s3_key,
            ExtraArgs=extra_args,
            Config=transfer_config,
            Callback=progress_tracker
        )


class ParallelUploadExecutor:
    """並列アップロード実行"""

    def __init__(self, executor: UploadExecutor, max_workers: Optional[int] = None):
        self.executor = executor
        self.max_workers = max_workers
        self.logger = LoggerManager.get_logger()

    def upload_files(self, upload_tasks: List[Tuple[FileInfo, str, str]]) -> UploadCounters:
        """複数ファイルを並列でアップロード

        全タスクを先に投入し、全件の完了を待ってから集計結果を返す。
        件数の更新は呼び出し元のスレッドでのみ行う。

        Args:
            upload_tasks: (FileInfo, bucket, s3_key) のタプルのリスト

        Returns:
            UploadCounters
        """
        counters = UploadCounters(total=len(upload_tasks))
        if not upload_tasks:
            return counters

        self.logger.info(f"Starting parallel upload of {counters.total} files")

        dots = ProgressDots() if self.executor.options.enable_progress else None

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            future_to_task = {
                pool.submit(self.executor.upload_file, file_info, bucket, s3_key): (file_info, s3_key)
                for file_info, bucket, s3_key in upload_tasks
            }

            for future in as_completed(future_to_task):
                file_info, s3_key = future_to_task[future]
                try:
                    result = future.result()
                except Exception as e:
                    self.logger.error(f"Upload task exception for {file_info.path}: {e}")
                    result = UploadResult(file_info.path, s3_key, success=False, error=str(e))

                counters.record(result)
                if dots is not None and not result.multipart:
                    dots.tick()

        if dots is not None:
            dots.finish()
        return counters
