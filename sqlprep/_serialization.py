"""JSON encoding and decoding backed by msgspec."""

from typing import Any, Literal, overload

import msgspec

from sqlprep.exceptions import SerializationError

__all__ = ("decode_json", "encode_json")

_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


@overload
def encode_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def encode_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to a JSON string or bytes.

    Raises:
        SerializationError: If msgspec cannot encode ``data``.
    """
    try:
        encoded = _encoder.encode(data)
    except (TypeError, msgspec.EncodeError) as exc:
        msg = f"Unable to encode value of type {type(data).__name__} to JSON"
        raise SerializationError(msg) from exc
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")


def decode_json(data: "str | bytes") -> Any:
    """Decode a JSON string or bytes.

    Raises:
        SerializationError: If ``data`` is not valid JSON.
    """
    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as exc:
        msg = "Unable to decode JSON value"
        raise SerializationError(msg) from exc
