class GridConversionError(ValueError):
    """Base class for every conversion failure raised by tacgrid."""


class InvalidLatitude(GridConversionError):
    pass


class InvalidLongitude(GridConversionError):
    pass


class UnsupportedZone(GridConversionError):
    """Latitude lies in the polar caps (UPS), which UTM/MGRS does not cover here."""


class MalformedGridReference(GridConversionError):
    pass


class OutOfRangeZoneNumber(MalformedGridReference):
    """Zone number outside 1..60."""


class InvalidPrecision(GridConversionError):
    pass
