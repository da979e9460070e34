"""S3転送設定管理"""
from boto3.s3.transfer import TransferConfig as BotoTransferConfig
from ..models.config import UploadOptions
from ..utils.file_utils import MB


class TransferConfigManager:
    """S3転送設定の管理"""

    @staticmethod
    def create_config(options: UploadOptions, part_count: int) -> BotoTransferConfig:
        """マルチパート用のTransferConfigを作成

        パートサイズは閾値と同じ、同時実行数はパート数と同じにする。
        マルチパートにするかどうかは呼び出し側で判定済みなので、
        boto3 側の閾値は 1MB にして必ず分割させる。
        """
        return BotoTransferConfig(
            multipart_threshold=MB,
            multipart_chunksize=options.multipart_threshold_bytes,
            max_concurrency=max(part_count, 1),
            use_threads=True,
        )
