"""Camera barcode capture."""

from lager.scanner.capture import BarcodeCapture, BarcodeDecoder, CameraSource, CaptureState

__all__ = [
    "BarcodeCapture",
    "BarcodeDecoder",
    "CameraSource",
    "CaptureState",
]
