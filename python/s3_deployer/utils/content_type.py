"""ファイル名からContent-Typeを判定"""
from typing import Sequence, Tuple

from ..models.config import DEFAULT_CONTENT_TYPES


DEFAULT_CONTENT_TYPE = "application/octet-stream"


def resolve_content_type(
    file_name: str,
    content_types: Sequence[Tuple[str, str]] = DEFAULT_CONTENT_TYPES,
) -> str:
    """ファイル名に含まれる拡張子からContent-Typeを返す

    大文字小文字は区別しない部分一致で、テーブルの先頭から順に判定する。
    どれにも一致しなければ application/octet-stream。
    """
    name = file_name.lower()
    for extension, content_type in content_types:
        if extension in name:
            return content_type
    return DEFAULT_CONTENT_TYPE
