"""アップロード先フォルダの削除"""
from typing import List

from botocore.exceptions import BotoCoreError, ClientError
from ..utils.logger import LoggerManager


# DeleteObjects は1リクエスト最大1000キー
DELETE_BATCH_SIZE = 1000


class CleanError(RuntimeError):
    """バケットの一覧取得・削除に失敗した場合のエラー"""


class RemoteCleaner:
    """バケット（またはフォルダ）の中身を削除"""

    def __init__(self, s3_client):
        self.s3_client = s3_client
        self.logger = LoggerManager.get_logger()

    def list_keys(self, bucket: str) -> List[str]:
        """バケット内の全オブジェクトのキーを取得"""
        keys: List[str] = []
        params = {"Bucket": bucket}
        while True:
            response = self.s3_client.list_objects_v2(**params)
            keys.extend(item["Key"] for item in response.get("Contents", []))
            if not response.get("IsTruncated"):
                return keys
            params["ContinuationToken"] = response["NextContinuationToken"]

    def empty_prefix(self, bucket: str, prefix: str = "") -> int:
        """フォルダの中身を削除し、削除したキー数を返す

        prefix が空ならバケット全体が対象。
        prefix はキーの先頭ではなく部分一致で判定する（従来の挙動）。
        """
        self.logger.info(f"Emptying bucket: {bucket} (folder: '{prefix}')")

        try:
            keys = self.list_keys(bucket)
        except (BotoCoreError, ClientError) as e:
            self.logger.exception(f"Failed to list objects in {bucket}")
            raise CleanError(f"Failed to list objects in {bucket}: {e}") from e

        if prefix:
            keys = [key for key in keys if prefix in key]

        if not keys:
            self.logger.info("Nothing to delete.")
            return 0

        for start in range(0, len(keys), DELETE_BATCH_SIZE):
            self._delete_batch(bucket, keys[start:start + DELETE_BATCH_SIZE])

        self.logger.info(f"Deleted {len(keys)} objects from {bucket}")
        return len(keys)

    def _delete_batch(self, bucket: str, keys: List[str]):
        try:
            response = self.s3_client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True}
            )
        except (BotoCoreError, ClientError) as e:
            self.logger.exception(f"Failed to delete objects from {bucket}")
            raise CleanError(f"Failed to delete objects from {bucket}: {e}") from e

        errors = response.get("Errors") or []
        if errors:
            for error in errors:
                self.logger.error(
                    f"Failed to delete {error.get('Key')}: "
                    f"{error.get('Code')} {error.get('Message')}"
                )
            raise CleanError(f"Failed to delete {len(errors)} objects from {bucket}")
