"""Helpers for reading botocore ClientError payloads."""

from botocore.exceptions import ClientError


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def status_code(error: ClientError) -> int:
    return error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)


def error_message(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Message", "") or str(error)
