"""Attribute and built-in type identifiers, security policies and diagnostics flags."""

from __future__ import annotations

from enum import IntEnum, IntFlag

__all__ = [
    "NODE_CLASS_ALL",
    "AttributeID",
    "TypeID",
    "ReturnDiagnostics",
    "SECURITY_POLICY_URI_PREFIX",
    "SECURITY_POLICY_URI_NONE",
    "SECURITY_POLICY_URI_BASIC128RSA15",
    "SECURITY_POLICY_URI_BASIC256",
    "SECURITY_POLICY_URI_BASIC256SHA256",
    "SECURITY_POLICY_URI_AES128SHA256RSAOAEP",
    "SECURITY_POLICY_URI_AES256SHA256RSAPSS",
    "SECURITY_POLICY_URIS",
    "format_security_policy_uri",
    "has_return_diagnostics",
]

NODE_CLASS_ALL = 0xFF


class AttributeID(IntEnum):
    """Identifiers assigned to attributes (Part 6, A.1)."""

    INVALID = 0
    NODE_ID = 1
    NODE_CLASS = 2
    BROWSE_NAME = 3
    DISPLAY_NAME = 4
    DESCRIPTION = 5
    WRITE_MASK = 6
    USER_WRITE_MASK = 7
    IS_ABSTRACT = 8
    SYMMETRIC = 9
    INVERSE_NAME = 10
    CONTAINS_NO_LOOPS = 11
    EVENT_NOTIFIER = 12
    VALUE = 13
    DATA_TYPE = 14
    VALUE_RANK = 15
    ARRAY_DIMENSIONS = 16
    ACCESS_LEVEL = 17
    USER_ACCESS_LEVEL = 18
    MINIMUM_SAMPLING_INTERVAL = 19
    HISTORIZING = 20
    EXECUTABLE = 21
    USER_EXECUTABLE = 22
    DATA_TYPE_DEFINITION = 23
    ROLE_PERMISSIONS = 24
    USER_ROLE_PERMISSIONS = 25
    ACCESS_RESTRICTIONS = 26
    ACCESS_LEVEL_EX = 27


class TypeID(IntEnum):
    """Built-in type identifiers (Part 6, 5.1.2)."""

    # Not part of the specification, but some servers return it.
    NULL = 0
    BOOLEAN = 1
    SBYTE = 2
    BYTE = 3
    INT16 = 4
    UINT16 = 5
    INT32 = 6
    UINT32 = 7
    INT64 = 8
    UINT64 = 9
    FLOAT = 10
    DOUBLE = 11
    STRING = 12
    DATE_TIME = 13
    GUID = 14
    BYTE_STRING = 15
    XML_ELEMENT = 16
    NODE_ID = 17
    EXPANDED_NODE_ID = 18
    STATUS_CODE = 19
    QUALIFIED_NAME = 20
    LOCALIZED_TEXT = 21
    EXTENSION_OBJECT = 22
    DATA_VALUE = 23
    VARIANT = 24
    DIAGNOSTIC_INFO = 25


class ReturnDiagnostics(IntFlag):
    """Options for the ReturnDiagnostics field of a request header."""

    NONE = 0
    SERVICE_LEVEL_SYMBOLIC_ID = 0x1
    SERVICE_LEVEL_LOCALIZED_TEXT = 0x2
    SERVICE_LEVEL_ADDITIONAL_INFO = 0x4
    SERVICE_LEVEL_INNER_STATUS_CODE = 0x8
    SERVICE_LEVEL_INNER_DIAGNOSTICS = 0x10
    OPERATION_LEVEL_SYMBOLIC_ID = 0x20
    OPERATION_LEVEL_LOCALIZED_TEXT = 0x40
    OPERATION_LEVEL_ADDITIONAL_INFO = 0x80
    OPERATION_LEVEL_INNER_STATUS_CODE = 0x100
    OPERATION_LEVEL_INNER_DIAGNOSTICS = 0x200

    SERVICE_LEVEL_ALL = (
        SERVICE_LEVEL_SYMBOLIC_ID
        | SERVICE_LEVEL_LOCALIZED_TEXT
        | SERVICE_LEVEL_ADDITIONAL_INFO
        | SERVICE_LEVEL_INNER_STATUS_CODE
        | SERVICE_LEVEL_INNER_DIAGNOSTICS
    )
    OPERATION_LEVEL_ALL = (
        OPERATION_LEVEL_SYMBOLIC_ID
        | OPERATION_LEVEL_LOCALIZED_TEXT
        | OPERATION_LEVEL_ADDITIONAL_INFO
        | OPERATION_LEVEL_INNER_STATUS_CODE
        | OPERATION_LEVEL_INNER_DIAGNOSTICS
    )
    ALL = SERVICE_LEVEL_ALL | OPERATION_LEVEL_ALL


def has_return_diagnostics(flags: int, mask: int) -> bool:
    """Return True if every bit of ``mask`` is set in ``flags``."""
    return flags & mask == mask


SECURITY_POLICY_URI_PREFIX = "http://opcfoundation.org/UA/SecurityPolicy#"
SECURITY_POLICY_URI_NONE = SECURITY_POLICY_URI_PREFIX + "None"
SECURITY_POLICY_URI_BASIC128RSA15 = SECURITY_POLICY_URI_PREFIX + "Basic128Rsa15"
SECURITY_POLICY_URI_BASIC256 = SECURITY_POLICY_URI_PREFIX + "Basic256"
SECURITY_POLICY_URI_BASIC256SHA256 = SECURITY_POLICY_URI_PREFIX + "Basic256Sha256"
SECURITY_POLICY_URI_AES128SHA256RSAOAEP = (
    SECURITY_POLICY_URI_PREFIX + "Aes128_Sha256_RsaOaep"
)
SECURITY_POLICY_URI_AES256SHA256RSAPSS = SECURITY_POLICY_URI_PREFIX + "Aes256_Sha256_RsaPss"

SECURITY_POLICY_URIS = {
    "None": SECURITY_POLICY_URI_NONE,
    "Basic128Rsa15": SECURITY_POLICY_URI_BASIC128RSA15,
    "Basic256": SECURITY_POLICY_URI_BASIC256,
    "Basic256Sha256": SECURITY_POLICY_URI_BASIC256SHA256,
    "Aes128Sha256RsaOaep": SECURITY_POLICY_URI_AES128SHA256RSAOAEP,
    "Aes256Sha256RsaPss": SECURITY_POLICY_URI_AES256SHA256RSAPSS,
}


def format_security_policy_uri(policy: str) -> str:
    """Turn a short security policy name into its canonical URI."""
    if not policy:
        return ""
    if policy in SECURITY_POLICY_URIS:
        return SECURITY_POLICY_URIS[policy]
    if not policy.startswith(SECURITY_POLICY_URI_PREFIX):
        return SECURITY_POLICY_URI_PREFIX + policy
    return policy