"""テスト共通のフィクスチャ"""
import os

import pytest
from botocore.exceptions import ClientError

from s3_deployer.models.config import LoggingConfig
from s3_deployer.utils.logger import LoggerManager


def client_error(code="AccessDenied", operation="PutObject"):
    return ClientError({"Error": {"Code": code, "Message": f"{code} error"}}, operation)


class FakeS3Client:
    """呼び出しを記録するだけのS3クライアント"""

    def __init__(
        self,
        objects=None,
        page_size=1000,
        put_errors=None,
        upload_errors=None,
        list_error=None,
        delete_error=None,
        delete_response_errors=None,
    ):
        self.objects = list(objects or [])
        self.page_size = page_size
        self.put_errors = put_errors or {}
        self.upload_errors = upload_errors or {}
        self.list_error = list_error
        self.delete_error = delete_error
        self.delete_response_errors = delete_response_errors or []
        self.list_calls = []
        self.delete_calls = []
        self.put_calls = []
        self.upload_calls = []
        self.events = []

    def list_objects_v2(self, **kwargs):
        self.list_calls.append(kwargs)
        self.events.append("list")
        if self.list_error is not None:
            raise self.list_error

        start = int(kwargs.get("ContinuationToken", 0))
        page = self.objects[start:start + self.page_size]
        response = {"KeyCount": len(page), "IsTruncated": False}
        if page:
            response["Contents"] = [{"Key": key, "Size": 1} for key in page]
        if start + self.page_size < len(self.objects):
            response["IsTruncated"] = True
            response["NextContinuationToken"] = str(start + self.page_size)
        return response

    def delete_objects(self, Bucket, Delete):
        keys = [item["Key"] for item in Delete["Objects"]]
        self.delete_calls.append((Bucket, keys))
        self.events.append("delete")
        if self.delete_error is not None:
            raise self.delete_error
        self.objects = [key for key in self.objects if key not in keys]
        return {"Deleted": [{"Key": key} for key in keys], "Errors": self.delete_response_errors}

    def put_object(self, **kwargs):
        call = dict(kwargs)
        call["Body"] = kwargs["Body"].read()
        self.put_calls.append(call)
        self.events.append(("put", kwargs["Key"]))
        error = self.put_errors.get(kwargs["Key"])
        if error is not None:
            raise error
        return {"ETag": '"etag"'}

    def upload_file(self, Filename, Bucket, Key, ExtraArgs=None, Callback=None, Config=None):
        self.upload_calls.append(
            {"Filename": Filename, "Bucket": Bucket, "Key": Key, "ExtraArgs": ExtraArgs, "Config": Config}
        )
        self.events.append(("upload", Key))
        error = self.upload_errors.get(Key)
        if error is not None:
            raise error
        if Callback is not None:
            Callback(os.path.getsize(Filename))


@pytest.fixture(autouse=True)
def logger():
    LoggerManager.reset()
    logger = LoggerManager.setup(LoggingConfig(level="DEBUG"))
    yield logger
    LoggerManager.reset()


@pytest.fixture
def fake_client():
    return FakeS3Client()


@pytest.fixture
def dist_dir(tmp_path):
    """3ファイル（うち1つはサブディレクトリ内）のビルド成果物"""
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<html></html>")
    (root / "app.js").write_text("console.log(1);")
    (root / "assets" / "logo.png").write_bytes(b"\x89PNG")
    return root


def make_sized_file(path, size):
    """指定サイズのファイルを作成（疎ファイル）"""
    with open(path, "wb") as file:
        file.truncate(size)
    return path
