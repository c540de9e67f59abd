from fastapi import HTTPException, status


# --- Persistence outcomes --- #

class UserNotFound(Exception): pass
class EmailAlreadyRegistered(Exception): pass


class StorageFault(Exception):
    """The backing store failed; details are logged where it happened."""


# --- HTTP errors --- #

class UserNotFoundException(HTTPException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found."
        )

class UserAlreadyExistsException(HTTPException):
    def __init__(self, field: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with this {field} already exists."
        )

class InvalidUserDataException(HTTPException):
    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message
        )
