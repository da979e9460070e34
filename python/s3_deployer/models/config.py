"""設定管理用のデータクラス"""
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple
import json
import os


ACL_CHOICES = (
    "private",
    "public-read",
    "public-read-write",
    "authenticated-read",
    "aws-exec-read",
    "bucket-owner-read",
    "bucket-owner-full-control",
)

DEFAULT_CONFIG_PATH = "./AwsConfig.json"

# 拡張子の部分一致で判定する。先に一致したものが優先される
DEFAULT_CONTENT_TYPES: Tuple[Tuple[str, str], ...] = (
    (".html", "text/html"),
    (".css", "text/css"),
    (".json", "application/json"),
    (".js", "application/x-javascript"),
    (".png", "image/png"),
    (".jpg", "image/jpg"),
    (".svg", "image/svg+xml"),
)

# S3のマルチパートは最終パート以外5MB以上が必須
MIN_MULTIPART_THRESHOLD_MB = 5


class ConfigurationError(ValueError):
    """必須パラメータが不足している場合のエラー"""


@dataclass
class LoggingConfig:
    """ロギング設定"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AWSConfig:
    """認証情報ファイル（AwsConfig.json）の内容"""
    access_key_id: str
    secret_access_key: str
    region: Optional[str] = None
    session_token: Optional[str] = None

    def __post_init__(self):
        if not self.access_key_id or not self.access_key_id.strip():
            raise ValueError("accessKeyId cannot be empty")
        if not self.secret_access_key or not self.secret_access_key.strip():
            raise ValueError("secretAccessKey cannot be empty")

    @classmethod
    def from_file(cls, config_path: str) -> 'AWSConfig':
        """認証情報ファイルから読み込み"""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"AWS config file {config_path} not found.")

        try:
            with open(config_path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error decoding JSON from {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"AWS config file {config_path} must contain a JSON object")

        missing = [key for key in ("accessKeyId", "secretAccessKey") if key not in data]
        if missing:
            raise ValueError(
                f"AWS config file {config_path} is missing: {', '.join(missing)}"
            )

        return cls(
            access_key_id=data["accessKeyId"],
            secret_access_key=data["secretAccessKey"],
            region=data.get("region"),
            session_token=data.get("sessionToken"),
        )


@dataclass
class UploadOptions:
    """アップロードオプション"""
    multipart_threshold_mb: int = MIN_MULTIPART_THRESHOLD_MB
    timeout_seconds: int = 300
    max_workers: Optional[int] = None
    content_types: Tuple[Tuple[str, str], ...] = DEFAULT_CONTENT_TYPES
    enable_progress: bool = True

    def __post_init__(self):
        if self.multipart_threshold_mb < MIN_MULTIPART_THRESHOLD_MB:
            raise ValueError(
                f"Invalid multipart_threshold_mb: {self.multipart_threshold_mb}. "
                f"Must be at least {MIN_MULTIPART_THRESHOLD_MB} MB"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. Must be positive"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(
                f"Invalid max_workers: {self.max_workers}. Must be at least 1"
            )

    @property
    def multipart_threshold_bytes(self) -> int:
        return self.multipart_threshold_mb * 1024 * 1024

    @property
    def worker_count(self) -> int:
        """同時アップロード数（未指定時は ThreadPoolExecutor の既定値と同じ）"""
        if self.max_workers is not None:
            return self.max_workers
        return min(32, (os.cpu_count() or 1) + 4)


@dataclass
class DeployConfig:
    """デプロイ実行時の設定（起動時に一度だけ作成）"""
    # 必須フィールド（デフォルト値なし）を先に
    bucket: str
    dist_path: str

    # オプションフィールド（デフォルト値あり）を後に
    folder: str = ""
    acl: str = "private"
    empty: bool = False
    datestamp: bool = True
    config_path: str = DEFAULT_CONFIG_PATH
    options: UploadOptions = field(default_factory=UploadOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        if not self.bucket:
            raise ConfigurationError("bucket name is required")
        if not self.dist_path:
            raise ConfigurationError("path to distribution files is required")
        if self.acl not in ACL_CHOICES:
            raise ValueError(
                f"Invalid acl: {self.acl}. Must be one of: {', '.join(ACL_CHOICES)}"
            )

    def describe(self, folder: Optional[str] = None,
                 dist_path: Optional[str] = None) -> List[Tuple[str, object]]:
        """表示用の設定一覧（フォルダ・パスは補正後の値を渡せる）"""
        return [
            ("BUCKET_NAME (required)", self.bucket),
            ("DIST_PATH (required)", self.dist_path if dist_path is None else dist_path),
            ("AWS_CONFIG", self.config_path),
            ("EMPTY_BUCKET", self.empty),
            ("BUCKET_FOLDER", self.folder if folder is None else folder),
            ("BUCKET_ACL", self.acl),
            ("DATESTAMP_FOLDER", self.datestamp),
            ("MULTIPART_THRESHOLD_MB", self.options.multipart_threshold_mb),
        ]


def build_deploy_config(
    bucket: Optional[str],
    dist_path: Optional[str],
    env: Mapping[str, str],
    **kwargs,
) -> DeployConfig:
    """CLI引数と環境変数からDeployConfigを作成

    引数が優先され、無い場合は BUCKET_NAME / DIST_PATH 環境変数を使う。
    """
    bucket = bucket or env.get("BUCKET_NAME")
    dist_path = dist_path or env.get("DIST_PATH")

    if not bucket or not dist_path:
        raise ConfigurationError(
            "Required parameters not set, please set BUCKET_NAME and DIST_PATH environment variables"
        )

    return DeployConfig(bucket=bucket, dist_path=dist_path, **kwargs)
