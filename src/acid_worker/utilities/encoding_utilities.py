""" Collection of base64 utility functions for Kubernetes Secret data """

import base64
import binascii

from acid_worker.services.exceptions import DecodeError


def b64enc(text: str | bytes) -> str:
    """Encode `text` (UTF-8 if a string) with the standard, padded base64 alphabet"""
    raw = text.encode("utf-8") if isinstance(text, str) else text
    return base64.b64encode(raw).decode("ascii")


def b64dec_bytes(opaque: str, value_name: str = "value") -> bytes:
    """Strict inverse of `b64enc`, returning the raw bytes"""
    try:
        return base64.b64decode(opaque, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise DecodeError(value_name=value_name) from exc


def b64dec(opaque: str, value_name: str = "value") -> str:
    """Strict inverse of `b64enc`, the decoded payload must be UTF-8 text"""
    raw = b64dec_bytes(opaque, value_name)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(value_name=value_name) from exc
