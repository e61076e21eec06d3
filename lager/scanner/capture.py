"""Barcode capture - one decoded barcode per camera session.

State machine:
    idle -> capturing -> detected -> idle   (barcode found)
    idle -> capturing -> idle               (cancelled or failed)

The camera is released on every exit path, including task cancellation.
"""

import asyncio
from enum import Enum
from typing import Any, Protocol

from lager.config import settings
from lager.core.errors import DecodeUnsupportedError
from lager.infra.logging import get_logger

logger = get_logger(__name__)


class CameraSource(Protocol):
    """Exclusive camera resource. read() may be called from a worker thread."""

    def open(self) -> None:
        """Acquire the camera. Raises CameraUnavailableError."""
        ...

    def read(self) -> Any | None:
        """Grab one frame, or None if no frame is available right now."""
        ...

    def release(self) -> None:
        """Release the camera."""
        ...


class BarcodeDecoder(Protocol):
    """Symbology-agnostic barcode decoder."""

    def ensure_supported(self) -> None:
        """Raise DecodeUnsupportedError if this host cannot decode barcodes."""
        ...

    def decode(self, frame: Any) -> str | None:
        """Return the first barcode found in the frame, or None."""
        ...


class CaptureState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    DETECTED = "detected"


class BarcodeCapture:
    """Samples camera frames until one barcode is decoded.

    Each call to scan() is one session and yields at most one barcode.
    """

    def __init__(
        self,
        camera: CameraSource,
        decoder: BarcodeDecoder,
        frame_interval: float | None = None,
    ) -> None:
        """Initialize the capture.

        Args:
            camera: Camera to sample frames from
            decoder: Decoder applied to every frame
            frame_interval: Delay between frames in seconds (defaults to settings)
        """
        self._camera = camera
        self._decoder = decoder
        self._frame_interval = (
            settings.scan_frame_interval if frame_interval is None else frame_interval
        )
        self._state = CaptureState.IDLE
        self._camera_open = False

    @property
    def state(self) -> CaptureState:
        return self._state

    def start(self) -> None:
        """Acquire the camera and enter the capturing state.

        Raises:
            CameraUnavailableError: If no camera can be opened
            DecodeUnsupportedError: If the host cannot decode barcodes
        """
        if self._state is not CaptureState.IDLE:
            raise RuntimeError(f"capture already running (state={self._state.value})")

        self._camera.open()
        self._camera_open = True
        try:
            self._decoder.ensure_supported()
        except DecodeUnsupportedError:
            self.stop()
            raise

        self._state = CaptureState.CAPTURING
        logger.info("Barcode capture started")

    def stop(self) -> None:
        """Release the camera. Safe to call repeatedly or before start()."""
        if self._camera_open:
            self._camera.release()
            self._camera_open = False
            logger.info("Camera released", state=self._state.value)
        self._state = CaptureState.IDLE

    async def scan(self) -> str:
        """Run one capture session and return the decoded barcode.

        Frames are read and decoded in a worker thread until a barcode is
        found or the calling task is cancelled. Decode failures on single
        frames are ignored.

        Raises:
            CameraUnavailableError: If no camera can be opened
            DecodeUnsupportedError: If the host cannot decode barcodes
            asyncio.CancelledError: If the session was cancelled
        """
        self.start()
        frames = 0
        try:
            while True:
                frame = await asyncio.to_thread(self._camera.read)
                frames += 1
                if frame is not None:
                    barcode = await self._try_decode(frame)
                    if barcode:
                        self._state = CaptureState.DETECTED
                        logger.info("Barcode detected", barcode=barcode, frames=frames)
                        return barcode
                await asyncio.sleep(self._frame_interval)
        except asyncio.CancelledError:
            logger.info("Barcode capture cancelled", frames=frames)
            raise
        finally:
            self.stop()

    async def _try_decode(self, frame: Any) -> str | None:
        try:
            return await asyncio.to_thread(self._decoder.decode, frame)
        except Exception as e:
            logger.debug("Frame decode failed", error=str(e))
            return None
