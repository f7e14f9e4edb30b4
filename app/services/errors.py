class ValidationError(Exception):
    pass


class NotFoundError(Exception):
    pass


class NotificationError(Exception):
    pass
