from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class QRNotFound(NotFound):
    default_detail = 'QR code not found'
    default_code = 'qr_not_found'


class PersistenceError(APIException):
    """Raised when the statistics of a QR code could not be stored."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Could not store QR statistics, try again later'
    default_code = 'persistence_error'


class QRAlreadyExists(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A QR code already exists for this profile'
    default_code = 'qr_exists'
