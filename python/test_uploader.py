#!/usr/bin/env python3
"""アップロード実行のテスト"""
from boto3.exceptions import S3UploadFailedError

from conftest import FakeS3Client, client_error, make_sized_file
from s3_deployer.models.config import UploadOptions
from s3_deployer.core.uploader import (
    ParallelUploadExecutor,
    UploadCounters,
    UploadExecutor,
    UploadResult,
)
from s3_deployer.utils.file_utils import FileScanner

MB = 1024 * 1024


def file_info(path):
    return FileScanner().get_file_info(str(path))


def test_small_file_uses_single_put(tmp_path):
    client = FakeS3Client()
    executor = UploadExecutor(client, UploadOptions(), acl="public-read")
    path = tmp_path / "index.html"
    path.write_text("<html></html>")

    result = executor.upload_file(file_info(path), "site", "v1/index.html")

    assert result.success is True
    assert result.multipart is False
    assert client.upload_calls == []
    assert client.put_calls == [{
        "Bucket": "site",
        "Key": "v1/index.html",
        "Body": b"<html></html>",
        "ACL": "public-read",
        "ContentType": "text/html",
    }]


def test_threshold_size_uses_multipart(tmp_path):
    client = FakeS3Client()
    executor = UploadExecutor(client, UploadOptions(enable_progress=False), acl="private")
    path = make_sized_file(tmp_path / "video.bin", 5 * MB)

    result = executor.upload_file(file_info(path), "site", "video.bin")

    assert result.success is True
    assert result.multipart is True
    assert client.put_calls == []
    call = client.upload_calls[0]
    assert call["Key"] == "video.bin"
    assert call["ExtraArgs"] == {"ACL": "private", "ContentType": "application/octet-stream"}
    assert call["Config"].multipart_chunksize == 5 * MB
    assert call["Config"].max_concurrency == 1


def test_multipart_boundary(tmp_path):
    """MB切り上げのサイズで判定する"""
    executor = UploadExecutor(FakeS3Client(), UploadOptions())

    assert executor.is_multipart(file_info(make_sized_file(tmp_path / "a", 5 * MB))) is True
    assert executor.is_multipart(file_info(make_sized_file(tmp_path / "b", 4 * MB))) is False
    assert executor.is_multipart(file_info(make_sized_file(tmp_path / "c", 4 * MB + 1))) is True
    assert executor.is_multipart(file_info(make_sized_file(tmp_path / "d", 0))) is False


def test_multipart_concurrency_scales_with_size(tmp_path, capsys):
    client = FakeS3Client()
    executor = UploadExecutor(client, UploadOptions())
    path = make_sized_file(tmp_path / "big.bin", 11 * MB)

    executor.upload_file(file_info(path), "site", "big.bin")

    assert client.upload_calls[0]["Config"].max_concurrency == 3
    out = capsys.readouterr().out
    assert "##### File: big.bin, Uploading Part: 11 MB - 100 %" in out


def test_custom_threshold(tmp_path):
    client = FakeS3Client()
    executor = UploadExecutor(client, UploadOptions(multipart_threshold_mb=10, enable_progress=False))
    path = make_sized_file(tmp_path / "mid.bin", 6 * MB)

    result = executor.upload_file(file_info(path), "site", "mid.bin")

    assert result.multipart is False
    assert len(client.put_calls) == 1


def test_upload_failure_is_returned_not_raised(tmp_path, caplog):
    client = FakeS3Client(put_errors={"broken.css": client_error()})
    executor = UploadExecutor(client, UploadOptions())
    path = tmp_path / "broken.css"
    path.write_text("body{}")

    result = executor.upload_file(file_info(path), "site", "broken.css")

    assert result.success is False
    assert "AccessDenied" in result.error
    assert f"Failed to upload {path}" in caplog.text


def test_multipart_failure_is_returned(tmp_path):
    client = FakeS3Client(upload_errors={"big.bin": S3UploadFailedError("boom")})
    executor = UploadExecutor(client, UploadOptions(enable_progress=False))
    path = make_sized_file(tmp_path / "big.bin", 6 * MB)

    result = executor.upload_file(file_info(path), "site", "big.bin")

    assert result.success is False
    assert result.multipart is True
    assert result.error == "boom"


def test_missing_local_file_is_a_failure(tmp_path):
    path = tmp_path / "gone.js"
    path.write_text("x")
    info = file_info(path)
    path.unlink()

    result = UploadExecutor(FakeS3Client(), UploadOptions()).upload_file(info, "site", "gone.js")

    assert result.success is False


def test_counters():
    counters = UploadCounters(total=3)
    counters.record(UploadResult("a", "a", success=True))
    counters.record(UploadResult("b", "b", success=False, error="x"))

    assert counters.processed == 2
    assert counters.uploaded == 1
    assert counters.complete is False

    counters.record(UploadResult("c", "c", success=True))

    assert counters.complete is True
    assert counters.failed == 1


def test_parallel_upload_isolates_failures(dist_dir, capsys):
    client = FakeS3Client(put_errors={"app.js": client_error()})
    executor = UploadExecutor(client, UploadOptions())
    tasks = [
        (info, "site", info.key_path)
        for info in FileScanner().scan_directory(str(dist_dir))
    ]

    counters = ParallelUploadExecutor(executor, max_workers=4).upload_files(tasks)

    assert counters.total == 3
    assert counters.processed == 3
    assert counters.uploaded == 2
    assert counters.failed == 1
    assert sorted(call["Key"] for call in client.put_calls) == [
        "app.js", "assets/logo.png", "index.html"
    ]
    assert capsys.readouterr().out == "...\n"


def test_parallel_upload_with_no_files():
    executor = UploadExecutor(FakeS3Client(), UploadOptions())

    counters = ParallelUploadExecutor(executor).upload_files([])

    assert counters.total == 0
    assert counters.complete is True
