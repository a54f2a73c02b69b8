# Validation (1000-1999)
UNRECOGNIZED_ENDPOINT = 1001
INVALID_REFRESH_INTERVAL = 1002

# Not Found (2000-2999)
NO_USAGE_DATA = 2001

# External Service (5000-5999)
USAGE_API_TRANSPORT_FAILED = 5001
USAGE_API_BAD_STATUS = 5002
USAGE_API_BAD_SCHEMA = 5003

# Configuration (7000-7999)
CONFIG_DIR_CREATE_FAILED = 7001
CONFIG_SERIALIZE_FAILED = 7002
CONFIG_WRITE_FAILED = 7003
CONFIG_READ_FAILED = 7004
CONFIG_PARSE_FAILED = 7005

# Internal (8000-8999)
USAGE_FETCH_FAILED = 8001
