from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, List, Tuple

from .errors import SchemaParseError


def read_text_content(file_obj) -> Tuple[str, str]:
    """Read an uploaded file or file path into (file name, text).

    Raises:
        SchemaParseError: if the content is not UTF-8 text.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        name = os.path.basename(getattr(file_obj, 'name', None) or 'schema.json')
    else:
        path = file_obj.name if hasattr(file_obj, 'name') else file_obj
        with open(path, 'rb') as f:
            content = f.read()
        name = os.path.basename(path)

    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise SchemaParseError(name, f"not UTF-8 text ({exc.reason} at byte {exc.start})") from exc
    return name, content


def read_uploaded_files(file_objs: Iterable[Any]) -> List[Tuple[str, str]]:
    """Read uploads one after another, in the order they were given."""
    return [read_text_content(file_obj) for file_obj in file_objs or []]


def parse_schema_document(name: str, text: str) -> Dict[str, Any]:
    """Parse one schema document; anything but a JSON object is rejected."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(name, str(exc)) from exc

    if not isinstance(document, dict):
        raise SchemaParseError(name, f"expected a JSON object, got {type(document).__name__}")
    return document
