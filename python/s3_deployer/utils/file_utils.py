"""ファイル操作関連のユーティリティ"""
import math
import os
from typing import Iterator
from dataclasses import dataclass


MB = 1024 * 1024


@dataclass
class FileInfo:
    """ファイル情報"""
    path: str
    size: int
    relative_path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def key_path(self) -> str:
        """S3キー用の相対パス（区切りは常に '/'）"""
        return self.relative_path.replace(os.sep, "/")


def file_size_in_mb(size_bytes: int) -> int:
    """ファイルサイズをMB単位で返す（切り上げ）"""
    return math.ceil(size_bytes / 1024 / 1024)


def multipart_part_count(size_mb: int, threshold_mb: int) -> int:
    """マルチパートアップロードのパート数"""
    return math.ceil(size_mb / threshold_mb)


def _raise_walk_error(error: OSError):
    raise error


class FileScanner:
    """ファイルスキャン機能"""

    def scan_directory(self, directory: str) -> Iterator[FileInfo]:
        """ディレクトリを再帰的にスキャンしてファイル情報を生成

        順序はディレクトリの列挙順でソートはしない。
        """
        if not os.path.exists(directory):
            raise FileNotFoundError(f"No such directory: {directory}")
        if not os.path.isdir(directory):
            raise NotADirectoryError(f"Not a directory: {directory}")

        for root, _dirs, files in os.walk(directory, onerror=_raise_walk_error):
            for file in files:
                file_path = os.path.join(root, file)
                if not os.path.isfile(file_path):
                    # リンク切れのシンボリックリンクなど
                    continue
                yield FileInfo(
                    path=file_path,
                    size=os.path.getsize(file_path),
                    relative_path=os.path.relpath(file_path, directory)
                )

    def get_file_info(self, file_path: str) -> FileInfo:
        """単一ファイルの情報を取得"""
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Not a file: {file_path}")

        return FileInfo(
            path=file_path,
            size=os.path.getsize(file_path),
            relative_path=os.path.basename(file_path)
        )
