"""Enumerations shared by the Mochow request and response models."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class FieldType(StrEnum):
    BOOL = "BOOL"
    INT8 = "INT8"
    UINT8 = "UINT8"
    INT16 = "INT16"
    UINT16 = "UINT16"
    INT32 = "INT32"
    UINT32 = "UINT32"
    INT64 = "INT64"
    UINT64 = "UINT64"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIMESTAMP = "TIMESTAMP"
    STRING = "STRING"
    BINARY = "BINARY"
    UUID = "UUID"
    TEXT = "TEXT"
    TEXT_GBK = "TEXT_GBK"
    TEXT_GB18030 = "TEXT_GB18030"
    FLOAT_VECTOR = "FLOAT_VECTOR"


class IndexType(StrEnum):
    FLAT = "FLAT"
    HNSW = "HNSW"
    HNSWPQ = "HNSWPQ"
    PUCK = "PUCK"
    SECONDARY_INDEX = "SECONDARY"


class MetricType(StrEnum):
    L2 = "L2"
    IP = "IP"
    COSINE = "COSINE"


class IndexState(StrEnum):
    INVALID = "INVALID"
    BUILDING = "BUILDING"
    NORMAL = "NORMAL"


class TableState(StrEnum):
    INVALID = "INVALID"
    CREATING = "CREATING"
    NORMAL = "NORMAL"
    DELETING = "DELETING"


class PartitionType(StrEnum):
    HASH = "HASH"


class ReadConsistency(StrEnum):
    EVENTUAL = "EVENTUAL"
    STRONG = "STRONG"


class AutoBuildPolicyType(StrEnum):
    """When the service rebuilds a vector index automatically.

    The service may answer in lower case; both spellings decode.
    """

    TIMING = "TIMING"
    PERIODICAL = "PERIODICAL"
    ROW_COUNT_INCREMENT = "ROW_COUNT_INCREMENT"

    @classmethod
    def _missing_(cls, value: object) -> AutoBuildPolicyType | None:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None


class ServerErrorCode(IntEnum):
    """Symbolic names for the numeric ``code`` of the service error envelope."""

    UNKNOWN = -1

    INTERNAL_ERROR = 1
    INVALID_PARAMETER = 2
    INVALID_HTTP_URL = 10
    INVALID_HTTP_HEADER = 11
    INVALID_HTTP_BODY = 12
    MISS_SSL_CERTIFICATES = 13

    USER_NOT_EXIST = 20
    USER_ALREADY_EXIST = 21
    ROLE_NOT_EXIST = 22
    ROLE_ALREADY_EXIST = 23
    AUTHENTICATION_FAILED = 24
    PERMISSION_DENIED = 25

    DB_NOT_EXIST = 50
    DB_ALREADY_EXIST = 51
    DB_TOO_MANY_TABLES = 52
    DB_NOT_EMPTY = 53

    INVALID_TABLE_SCHEMA = 60
    INVALID_PARTITION_PARAMETERS = 61
    TABLE_TOO_MANY_FIELDS = 62
    TABLE_TOO_MANY_FAMILIES = 63
    TABLE_TOO_MANY_PRIMARY_KEYS = 64
    TABLE_TOO_MANY_PARTITION_KEYS = 65
    TABLE_TOO_MANY_VECTOR_FIELDS = 66
    TABLE_TOO_MANY_INDEXES = 67
    DYNAMIC_SCHEMA_ERROR = 68
    TABLE_NOT_EXIST = 69
    TABLE_ALREADY_EXIST = 70
    INVALID_TABLE_STATE = 71
    TABLE_NOT_READY = 72
    ALIAS_NOT_EXIST = 73
    ALIAS_ALREADY_EXIST = 74

    FIELD_NOT_EXIST = 80
    FIELD_ALREADY_EXIST = 81
    VECTOR_FIELD_NOT_EXIST = 82

    INVALID_INDEX_SCHEMA = 90
    INDEX_NOT_EXIST = 91
    INDEX_ALREADY_EXIST = 92
    INDEX_DUPLICATED = 93
    INVALID_INDEX_STATE = 94

    PRIMARY_KEY_DUPLICATED = 100
    ROW_KEY_NOT_FOUND = 101

    @classmethod
    def from_code(cls, code: int) -> ServerErrorCode:
        """Map a service code to its symbol; codes outside the table are UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


__all__ = [
    "AutoBuildPolicyType",
    "FieldType",
    "IndexState",
    "IndexType",
    "MetricType",
    "PartitionType",
    "ReadConsistency",
    "ServerErrorCode",
    "TableState",
]
