"""
Fixed parameters shared by the scan executor and region discovery.
"""

# Continuous scan
DEFAULT_SCAN_TIME_BUDGET_SECONDS = 180.0  # 3 minutes per invocation
DEFAULT_SCAN_BATCH_SIZE = 500
DEFAULT_PAGE_SIZE = 500
MAX_PAGE_SIZE = 1000

# Region discovery
DEFAULT_DISCOVERY_CONCURRENCY = 10
DEFAULT_DISCOVERY_TABLE_LIMIT = 100
LOCAL_REGION_ID = "local"

# Regions probed during discovery
AWS_REGIONS = (
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "af-south-1",
    "ap-east-1",
    "ap-south-1",
    "ap-south-2",
    "ap-northeast-1",
    "ap-northeast-2",
    "ap-northeast-3",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-southeast-3",
    "ap-southeast-4",
    "ca-central-1",
    "eu-central-1",
    "eu-central-2",
    "eu-west-1",
    "eu-west-2",
    "eu-west-3",
    "eu-south-1",
    "eu-south-2",
    "eu-north-1",
    "il-central-1",
    "me-south-1",
    "me-central-1",
    "sa-east-1",
)

# Billing modes accepted by CreateTable
BILLING_MODE_PAY_PER_REQUEST = "PAY_PER_REQUEST"
BILLING_MODE_PROVISIONED = "PROVISIONED"

# Scalar key attribute types
KEY_ATTRIBUTE_TYPES = ("S", "N", "B")
