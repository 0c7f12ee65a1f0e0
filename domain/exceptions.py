"""Domain Exceptions"""


class UserNotFound(Exception):
    def __init__(self, email: str):
        self.email = email

    def __str__(self):
        return f"user '{self.email}' not found"


class UnknownStatus(Exception):
    def __init__(self, value):
        self.value = value

    def __str__(self):
        return f"Unknown booking status '{self.value}'"


class NotFoundException(Exception):
    def __init__(self, resource: str, identifier):
        self.resource = resource
        self.identifier = identifier

    def __str__(self):
        return f"{self.resource} '{self.identifier}' not found"


class EmailAlreadyRegistered(Exception):
    def __init__(self, email: str):
        self.email = email

    def __str__(self):
        return "Email already registered"
