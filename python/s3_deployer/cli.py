"""コマンドラインインターフェース"""
import argparse
import os
import sys
from typing import Mapping, Optional, Sequence

from . import S3Deployer, __version__
from .core.cleaner import CleanError
from .models.config import (
    ACL_CHOICES,
    DEFAULT_CONFIG_PATH,
    MIN_MULTIPART_THRESHOLD_MB,
    ConfigurationError,
    LoggingConfig,
    UploadOptions,
    build_deploy_config,
)
from .utils.logger import LoggerManager


EXIT_SUCCESS = 0
EXIT_FAILURE = -1

USAGE = "%(prog)s <bucket name> <path/to/distribution_files> [args]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3-deployer",
        usage=USAGE,
        description="Upload static build files to an S3 bucket.",
    )
    parser.add_argument("bucket", nargs="?", help="S3 bucket name (or BUCKET_NAME)")
    parser.add_argument("dist_path", nargs="?", help="Path to distribution files (or DIST_PATH)")
    parser.add_argument(
        "--empty",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Empty the specified S3 Bucket folder",
    )
    parser.add_argument(
        "--folder", "--dir", "--directory",
        dest="folder",
        default="",
        help="Specify S3 bucket folder as upload destination",
    )
    parser.add_argument(
        "--config", "--cfg",
        dest="config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to AWS Config json file that includes accessKeyId & secretAccessKey",
    )
    parser.add_argument(
        "--acl", "--access",
        dest="acl",
        default="private",
        choices=ACL_CHOICES,
        help="Access permissions for the uploaded file(s)",
    )
    parser.add_argument(
        "--datestamp", "--date",
        dest="datestamp",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Add current date to the bucket folder, format: yyyyMMdd",
    )
    parser.add_argument(
        "--multipart-threshold",
        type=int,
        default=MIN_MULTIPART_THRESHOLD_MB,
        metavar="MB",
        help="Minimum size in MB that uses a multipart upload (also the part size)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=300,
        metavar="SECONDS",
        help="Per-request read timeout",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None, env: Optional[Mapping[str, str]] = None) -> int:
    """メイン関数（終了コードを返す）"""
    parser = build_parser()
    args = parser.parse_args(argv)
    env = os.environ if env is None else env

    try:
        config = build_deploy_config(
            args.bucket,
            args.dist_path,
            env,
            folder=args.folder,
            acl=args.acl,
            empty=args.empty,
            datestamp=args.datestamp,
            config_path=args.config,
            options=UploadOptions(
                multipart_threshold_mb=args.multipart_threshold,
                timeout_seconds=args.timeout,
            ),
            logging=LoggingConfig(level=args.log_level, file=args.log_file),
        )
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        print(
            "Or pass them as arguments: 's3-deployer <bucket name> <path to distribution files>'",
            file=sys.stderr,
        )
        parser.print_usage(sys.stderr)
        print("Exiting...", file=sys.stderr)
        return EXIT_FAILURE
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE

    try:
        counters = S3Deployer(config).run()
    except CleanError as e:
        LoggerManager.get_logger().error(f"Deploy aborted: {e}")
        return EXIT_FAILURE
    except Exception as e:
        try:
            logger = LoggerManager.get_logger()
        except RuntimeError:
            # ロガーのセットアップ自体が失敗した場合
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FAILURE
        logger.exception(f"Error: {e}")
        return EXIT_FAILURE

    return EXIT_SUCCESS if counters.failed == 0 else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
