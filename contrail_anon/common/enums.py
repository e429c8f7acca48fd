from enum import Enum


class ResultCode(Enum):
    DONE = "done"
    FAIL = "fail"
    UNKNOWN = "unknown"


class VerboseOptions(Enum):
    INFO = "info"
    DEBUG = "debug"
    ERROR = "error"


class DumpTable(Enum):
    FQ_NAME = "fq_name_table"  # obj_fq_name_table, keys are object types, columns are fq_name:uuid
    UUID = "uuid_table"  # obj_uuid_table, keys are uuids, columns are properties
