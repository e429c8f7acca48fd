from pathlib import Path

RUNS_BASE_DIR = Path.cwd() / "runs"
LOGS_DIR_NAME = "logs"
LOGS_FILE_NAME = "contrail_anon.log"
TRACEBACK_LINES_COUNT = 100

# fq_name segments from which hashing stops for the rest of the name
STOP_HASH_PREFIXES = ("target",)
STOP_HASH_NAMES = ("default-project", "default-global-system-config")

# fq_name segments which are kept as is
KEEP_PREFIXES = ("default", "ingress", "egress")

FQ_NAME_SEPARATOR = ":"
IP_OCTETS_SEPARATOR = "."
HEX_PREFIX = "0x"
EMPTY_JSON_OBJECT = "{}"
NULL_LITERAL = "null"

FQ_NAME_COLUMN = "fq_name"
DISPLAY_NAME_COLUMN = "prop:display_name"
FLOATING_IP_COLUMN = "prop:floating_ip_address"

IP_MASK_SIZE = 3
IP_MASK_UPPER_BOUND = 255  # mask items are drawn from [0, 254]

DEFAULT_PROGRESS_EVERY = 100_000
CONFIG_KEYS = ("ip-mask", "progress-every")
