"""S3クライアント管理"""
import boto3
from typing import Optional
from botocore.config import Config as BotoConfig
from botocore.exceptions import NoCredentialsError
from ..models.config import AWSConfig, UploadOptions
from ..utils.logger import LoggerManager


MIN_POOL_CONNECTIONS = 10


class S3ClientManager:
    """S3クライアントの作成と管理"""

    def __init__(self, aws_config: AWSConfig, options: Optional[UploadOptions] = None):
        self.aws_config = aws_config
        self.options = options or UploadOptions()
        self.logger = LoggerManager.get_logger()
        self._client: Optional[boto3.client] = None

    def get_client(self) -> boto3.client:
        """S3クライアントを取得（必要に応じて作成）"""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> boto3.client:
        """認証情報ファイルの内容でS3クライアントを作成"""
        # リクエスト単位のタイムアウト（無通信状態の上限）
        # 接続プールは同時アップロード数に合わせる（botocore の既定は10）
        client_config = BotoConfig(
            read_timeout=self.options.timeout_seconds,
            max_pool_connections=max(MIN_POOL_CONNECTIONS, self.options.worker_count)
        )

        try:
            s3_client = boto3.client(
                's3',
                region_name=self.aws_config.region,
                aws_access_key_id=self.aws_config.access_key_id,
                aws_secret_access_key=self.aws_config.secret_access_key,
                aws_session_token=self.aws_config.session_token,
                config=client_config
            )
            self.logger.info("S3 client created with credentials from config file.")
            return s3_client

        except NoCredentialsError:
            self.logger.error("AWS credentials not available.")
            raise
        except Exception as e:
            self.logger.error(f"Error creating S3 client: {e}")
            raise
