"""Exceptions raised by mediashrink.

Every failure in identification, decoding or synthesis is reported with one
of the exception types below so callers can tell a bad input apart from a
broken external tool. All of them inherit from MediaShrinkError.
"""

from __future__ import annotations

from pathlib import Path


def _preview(output: bytes | str, limit: int = 512) -> str:
    """Render captured tool output for an error message."""
    if isinstance(output, bytes):
        text = output.decode("utf-8", errors="replace")
    else:
        text = output
    text = text.strip()
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class MediaShrinkError(Exception):
    """Base exception for mediashrink errors.

    Catch this to handle any identification, decoding or synthesis failure
    with a single except clause.
    """


class UnknownMediaTypeError(MediaShrinkError):
    """Raised when a file cannot be classified as image, audio or video.

    Also raised when the metadata read from a file violates the per-kind
    shape rules (for example an image reporting a zero width).

    Attributes:
        path: The file that could not be classified.
        reason: Optional detail describing why.
    """

    def __init__(self, path: Path | str | None = None, reason: str | None = None):
        self.path = path
        self.reason = reason
        message = "unknown media type"
        if path is not None:
            message = f"{message}: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidSignatureError(MediaShrinkError, ValueError):
    """Raised when a signature is not at least six lowercase hex digits.

    Attributes:
        signature: The rejected raw signature.
    """

    def __init__(self, signature: str, path: Path | str | None = None) -> None:
        self.signature = signature
        self.path = path
        context = f" for file {path}" if path is not None else ""
        super().__init__(f"wrong signature {signature!r}{context}")


class MalformedHeaderError(MediaShrinkError):
    """Raised when a binary header does not have the expected layout.

    Attributes:
        path: File the header was read from, when known.
        header: The raw header bytes that were inspected.
    """

    def __init__(
        self,
        reason: str,
        header: bytes = b"",
        path: Path | str | None = None,
    ) -> None:
        self.reason = reason
        self.header = header
        self.path = path
        context = f" in {path}" if path is not None else ""
        super().__init__(f"{reason}{context}")


class NotPNGError(MalformedHeaderError):
    """Raised when the PNG magic signature is missing."""

    def __init__(self, header: bytes = b"", path: Path | str | None = None) -> None:
        super().__init__("not a PNG file", header=header, path=path)


class MalformedStringError(MediaShrinkError, ValueError):
    """Raised when a serialized media info string cannot be decoded.

    Attributes:
        value: The string that failed to decode.
        reason: Which check failed.
    """

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"cannot convert {value!r} to media info: {reason}")


class ToolInvocationError(MediaShrinkError):
    """Raised when an external tool exits non-zero or cannot be started.

    Attributes:
        tool: Executable name or path that was invoked.
        returncode: Process exit status, or None if it never started.
        output: Combined stdout/stderr captured from the process.
        target: File the tool was working on.
    """

    def __init__(
        self,
        tool: str,
        returncode: int | None,
        output: bytes = b"",
        target: Path | str | None = None,
        detail: str | None = None,
    ) -> None:
        self.tool = tool
        self.returncode = returncode
        self.output = output
        self.target = target
        self.detail = detail

        if returncode is None:
            status = f"could not run: {detail}" if detail else "could not run"
        else:
            status = f"exited with status {returncode}"
        target_part = f" {target}" if target is not None else ""
        message = f"exec {tool}{target_part} {status}"
        captured = _preview(output)
        if captured:
            message = f"{message}, info: {captured}"
        super().__init__(message)


class ToolOutputUnparsableError(MediaShrinkError):
    """Raised when a tool exits cleanly but prints something unexpected.

    Attributes:
        output: The raw bytes that could not be parsed.
        reason: What was expected.
    """

    def __init__(self, output: bytes, reason: str) -> None:
        self.output = output
        self.reason = reason
        super().__init__(f"failed to parse tool output {output!r}: {reason}")


class UnsupportedFormatError(MediaShrinkError):
    """Raised when no placeholder can be generated for a media info.

    Attributes:
        info: Serialized form of the media info that was rejected.
    """

    def __init__(self, info: str) -> None:
        self.info = info
        super().__init__(f"unsupported media format {info}")


class HashFailureError(MediaShrinkError):
    """Raised when hashing a file yields a digest of unexpected length."""

    def __init__(self, path: Path | str, digest_size: int) -> None:
        self.path = path
        self.digest_size = digest_size
        super().__init__(
            f"error occurred when making hash sum of {path}: "
            f"got {digest_size} byte digest"
        )
