# Mapped to JSON responses by the handlers in imei_registry.main


class RegistryError(Exception):
    status_code = 500
    public_message = "Server error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(RegistryError):
    status_code = 400
    public_message = "Invalid request"


class UnauthorizedError(RegistryError):
    status_code = 401
    public_message = "Unauthorized"


class NotFoundError(RegistryError):
    status_code = 404
    public_message = "Report not found"


# Details stay in the logs; clients only see public_message
class StoreError(RegistryError):
    pass


class ConflictError(StoreError):
    pass


class ConfigurationError(RegistryError):
    status_code = 503
    public_message = "Admin login not configured"
