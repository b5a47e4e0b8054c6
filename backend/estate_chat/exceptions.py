# backend/estate_chat/exceptions.py


class ChatError(Exception):
    """Base for failures that end a chat request. str(exc) keeps the raw error text."""

    status_code = 500
    public_message = "Something went wrong while processing your request."


class MalformedFunctionArguments(ChatError):
    status_code = 400
    public_message = "Failed to parse function arguments"


class ExternalServiceFailure(ChatError):
    status_code = 500
    public_message = "Something went wrong while processing your request."
