"""User-facing message catalogs.

German is the primary locale; English is provided for operators.
Unknown keys fall back to the key itself.
"""

from lager.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "de": {
        # Confirmations
        "productCreated": "Produkt erfolgreich hinzugefügt",
        "productUpdated": "Produkt erfolgreich aktualisiert",
        "productDeleted": "Produkt erfolgreich gelöscht",
        "categoryCreated": "Kategorie erfolgreich erstellt",
        "quantityUpdated": "Menge aktualisiert",
        "productOutOfStock": "Produkt nicht mehr auf Lager",
        "exportSuccess": "Daten erfolgreich exportiert",
        "importSuccess": "Daten erfolgreich importiert",
        # Lookup
        "lookingUpBarcode": "Suche Produktinformationen...",
        "productInfoFound": "Produktinformationen gefunden",
        "noProductInfoFound": "Keine Produktinformationen gefunden",
        # Validation
        "barcodeRequired": "Barcode ist erforderlich",
        "nameRequired": "Produktname ist erforderlich",
        "invalidProductId": "Ungültige Produkt-ID",
        "invalidQuantity": "Menge darf nicht negativ sein",
        "invalidRequest": "Ungültige Anfrage",
        # Conflicts / not found
        "barcodeExists": "Produkt mit diesem Barcode existiert bereits",
        "slugExists": "Kategorie mit diesem Slug existiert bereits",
        "productNotFound": "Produkt nicht gefunden",
        "barcodeNotFound": "Produkt mit diesem Barcode nicht gefunden",
        "categoryNotFound": "Kategorie nicht gefunden",
        "importConflict": "Importdaten enthalten doppelte Einträge",
        # Scanner
        "cameraUnavailable": "Ihr Browser unterstützt keine Kamerafunktion",
        "cameraAccessFailed": "Fehler beim Zugriff auf die Kamera",
        "decodeUnsupported": "Barcode-Scanning wird auf diesem Gerät nicht unterstützt",
        "barcodeScanError": "Fehler beim Scannen des Barcodes",
        # Generic failures
        "error": "Fehler",
        "categoriesFetchError": "Fehler beim Abrufen der Kategorien",
        "categoryCreateError": "Fehler beim Erstellen der Kategorie",
        "productsFetchError": "Fehler beim Abrufen der Produkte",
        "productSaveError": "Fehler beim Speichern des Produkts",
        "productDeleteError": "Fehler beim Löschen des Produkts",
        "exportError": "Fehler beim Exportieren der Daten",
        "importError": "Fehler beim Importieren der Daten",
        "internalError": "Interner Serverfehler",
    },
    "en": {
        "productCreated": "Product added",
        "productUpdated": "Product updated",
        "productDeleted": "Product deleted",
        "categoryCreated": "Category created",
        "quantityUpdated": "Quantity updated",
        "productOutOfStock": "Product out of stock",
        "exportSuccess": "Data exported",
        "importSuccess": "Data imported",
        "lookingUpBarcode": "Looking up product information...",
        "productInfoFound": "Product information found",
        "noProductInfoFound": "No product information found",
        "barcodeRequired": "Barcode is required",
        "nameRequired": "Product name is required",
        "invalidProductId": "Invalid product id",
        "invalidQuantity": "Quantity must not be negative",
        "invalidRequest": "Invalid request",
        "barcodeExists": "A product with this barcode already exists",
        "slugExists": "A category with this slug already exists",
        "productNotFound": "Product not found",
        "barcodeNotFound": "No product with this barcode",
        "categoryNotFound": "Category not found",
        "importConflict": "Import data contains duplicate entries",
        "cameraUnavailable": "No camera available",
        "cameraAccessFailed": "Could not access the camera",
        "decodeUnsupported": "Barcode scanning is not supported on this device",
        "barcodeScanError": "Barcode scan failed",
        "error": "Error",
        "categoriesFetchError": "Could not load categories",
        "categoryCreateError": "Could not create category",
        "productsFetchError": "Could not load products",
        "productSaveError": "Could not save product",
        "productDeleteError": "Could not delete product",
        "exportError": "Export failed",
        "importError": "Import failed",
        "internalError": "Internal server error",
    },
}


def t(key: str, locale: str | None = None) -> str:
    """Translate a message key.

    Args:
        key: Message key
        locale: Locale code (defaults to settings.locale)

    Returns:
        Translated text, or the key itself when unknown
    """
    catalog = MESSAGES.get(locale or settings.locale, MESSAGES["de"])
    return catalog.get(key, key)
