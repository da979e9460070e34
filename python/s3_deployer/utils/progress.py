"""アップロード進捗の表示"""
import sys
import threading
from typing import Optional, TextIO

from .stamps import generate_timestamp


class ProgressTracker:
    """マルチパートアップロードの進捗を追跡

    boto3 の Callback として使い、パートサイズ分の転送ごとに一行出力する。
    """

    def __init__(self, s3_key: str, total_size: int, part_size: int,
                 stream: Optional[TextIO] = None):
        self.s3_key = s3_key
        self.total_size = total_size
        self.part_size = part_size
        self.stream = stream
        self.uploaded_size = 0
        self.reported_parts = 0
        self.lock = threading.Lock()

    def __call__(self, bytes_transferred: int):
        """boto3のコールバック関数として使用（転送スレッドから呼ばれる）"""
        with self.lock:
            self.uploaded_size += bytes_transferred
            parts_done = self.uploaded_size // self.part_size
            if self.uploaded_size >= self.total_size:
                parts_done = max(parts_done, self.reported_parts + 1)
            if parts_done > self.reported_parts:
                self.reported_parts = parts_done
                self._display_progress()

    def _display_progress(self):
        uploaded_mb = round(self.uploaded_size / 1024 / 1024)
        percent = round(self.uploaded_size / self.total_size * 100) if self.total_size else 100
        print(
            f"{generate_timestamp()} ##### File: {self.s3_key}, "
            f"Uploading Part: {uploaded_mb} MB - {percent} %",
            file=self.stream or sys.stdout,
            flush=True,
        )


class ProgressDots:
    """単発アップロードの完了ごとに '.' を出力"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.count = 0

    def tick(self):
        self.count += 1
        print(".", end="", file=self.stream or sys.stdout, flush=True)

    def finish(self):
        if self.count:
            print(file=self.stream or sys.stdout, flush=True)
