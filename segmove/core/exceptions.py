"""
All segment relocation exceptions
"""

from typing import Any


class SegmoveError(Exception):
    """Base segmove error"""


class SegmentLoadingError(SegmoveError):
    """
    A segment could not be made resolvable at the requested location.

    This is the error the catalog/orchestration layer catches: either the
    request itself was malformed or the segment's data could not be found.
    """

    def __init__(
        self,
        message: str,
        segment_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.segment_id = segment_id
        self.details = details or {}

    def __str__(self) -> str:
        if self.segment_id:
            return f"{self.message} [segment={self.segment_id}]"
        return self.message


class InvalidSpecError(SegmentLoadingError):
    """Load spec or relocation target is missing a required field"""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        segment_id: str | None = None,
    ):
        super().__init__(message, segment_id=segment_id, details={"field": field})
        self.field = field


class SegmentMissingError(SegmentLoadingError):
    """
    Segment data is not present at the source nor at the target location.

    Also raised when a copy fails (the source vanished between the existence
    check and the copy) or when a reportedly successful copy cannot be found
    at the target afterwards.
    """

    def __init__(
        self,
        message: str,
        segment_id: str | None = None,
        source: str | None = None,
        target: str | None = None,
    ):
        super().__init__(
            message,
            segment_id=segment_id,
            details={"source": source, "target": target},
        )
        self.source = source
        self.target = target


class MissingDependencyError(SegmoveError):
    """
    Raised when an optional dependency is not installed.

    This exception provides clear installation instructions to help users
    quickly resolve missing package issues.
    """

    INSTALL_COMMANDS = {
        "aioboto3": "pip install 'segmove[s3]'",
        "aiofiles": "pip install 'segmove[filesystem]'",
        "prometheus-client": "pip install 'segmove[prometheus]'",
    }

    def __init__(self, package: str, feature: str | None = None):
        self.package = package
        self.feature = feature

        install_cmd = self.INSTALL_COMMANDS.get(package, f"pip install {package}")

        if feature:
            message = (
                f"\n╔══════════════════════════════════════════════════════════════╗\n"
                f"║  Missing Dependency: {package:<40} ║\n"
                f"╠══════════════════════════════════════════════════════════════╣\n"
                f"║  Required for: {feature:<45} ║\n"
                f"║  Install with: {install_cmd:<45} ║\n"
                f"╚══════════════════════════════════════════════════════════════╝"
            )
        else:
            message = (
                f"\n╔══════════════════════════════════════════════════════════════╗\n"
                f"║  Missing Dependency: {package:<40} ║\n"
                f"╠══════════════════════════════════════════════════════════════╣\n"
                f"║  Install with: {install_cmd:<45} ║\n"
                f"╚══════════════════════════════════════════════════════════════╝"
            )

        super().__init__(message)
