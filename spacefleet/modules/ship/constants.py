"""Ship module constants — field limits, rating formula terms, paging defaults."""

from decimal import Decimal

# Ids are BIGINT; integer filters and paging values are 32-bit
SHIP_ID_MAX = 2**63 - 1
INT_PARAM_MIN = -(2**31)
INT_PARAM_MAX = 2**31 - 1
TIMESTAMP_PARAM_MIN = -(2**63)
TIMESTAMP_PARAM_MAX = 2**63 - 1

# Field limits
NAME_MAX_LENGTH = 50
PLANET_MAX_LENGTH = 50
SPEED_MIN = Decimal("0.10")
SPEED_MAX = Decimal("0.99")
CREW_SIZE_MIN = 1
CREW_SIZE_MAX = 9999
PROD_YEAR_MIN = 2800
PROD_YEAR_MAX = 3019

# rating = 80 * speed * k / (1119 - year + 1), k = 0.5 for used ships
RATING_BASE = 80.0
RATING_USED_FACTOR = 0.5
RATING_YEAR_ANCHOR = 1119

# Listing defaults
DEFAULT_PAGE_NUMBER = 0
DEFAULT_PAGE_SIZE = 3
DEFAULT_ORDER = "id"

# Lower-cased ``order`` values -> Ship attribute names
ORDER_FIELDS = {
    "id": "id",
    "name": "name",
    "planet": "planet",
    "shiptype": "ship_type",
    "ship_type": "ship_type",
    "proddate": "prod_date",
    "prod_date": "prod_date",
    "date": "prod_date",
    "isused": "is_used",
    "is_used": "is_used",
    "speed": "speed",
    "crewsize": "crew_size",
    "crew_size": "crew_size",
    "rating": "rating",
}
