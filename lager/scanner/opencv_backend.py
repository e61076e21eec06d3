"""OpenCV camera and zxing-cpp decoder for BarcodeCapture.

Both libraries come with the `scanner` extra and are imported lazily so the
API server runs without them. A missing library surfaces as the matching
ResourceError instead of an ImportError.
"""

import functools
import operator
import threading
from typing import Any

from lager.config import settings
from lager.core.errors import CameraUnavailableError, DecodeUnsupportedError
from lager.infra.logging import get_logger
from lager.scanner.capture import BarcodeCapture

logger = get_logger(__name__)


class OpenCVCamera:
    """Camera backed by cv2.VideoCapture."""

    def __init__(self, index: int | None = None) -> None:
        self.index = settings.camera_index if index is None else index
        self._capture: Any = None
        self._lock = threading.Lock()

    def open(self) -> None:
        try:
            import cv2
        except ImportError as e:
            raise CameraUnavailableError() from e

        capture = cv2.VideoCapture(self.index)
        if not capture.isOpened():
            capture.release()
            logger.warning("Camera could not be opened", index=self.index)
            raise CameraUnavailableError()

        self._capture = capture
        logger.info("Camera opened", index=self.index)

    def read(self) -> Any | None:
        with self._lock:
            if self._capture is None:
                return None
            ok, frame = self._capture.read()
        return frame if ok else None

    def release(self) -> None:
        # Waits for a read still running in a worker thread
        with self._lock:
            if self._capture is not None:
                self._capture.release()
                self._capture = None


class ZXingDecoder:
    """Decoder backed by zxing-cpp, restricted to the configured symbologies."""

    def __init__(self, formats: list[str] | None = None) -> None:
        self.format_names = formats or settings.scan_formats
        self._zxing: Any = None
        self._formats: Any = None

    def ensure_supported(self) -> None:
        if self._zxing is not None:
            return
        try:
            import zxingcpp
        except ImportError as e:
            raise DecodeUnsupportedError() from e

        try:
            formats = [getattr(zxingcpp.BarcodeFormat, name) for name in self.format_names]
        except AttributeError as e:
            logger.error("Unknown barcode format configured", formats=self.format_names)
            raise DecodeUnsupportedError() from e

        self._zxing = zxingcpp
        self._formats = functools.reduce(operator.or_, formats)

    def decode(self, frame: Any) -> str | None:
        self.ensure_supported()
        results = self._zxing.read_barcodes(frame, formats=self._formats)
        for result in results:
            if result.text:
                return result.text
        return None


def create_capture(camera_index: int | None = None) -> BarcodeCapture:
    """Build a BarcodeCapture wired to the OpenCV camera and zxing-cpp."""
    return BarcodeCapture(OpenCVCamera(camera_index), ZXingDecoder())
