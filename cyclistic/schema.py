# cyclistic/schema.py
"""
Canonical trip schema, raw column aliases and lookup tables shared by the pipeline.

Schema A is the 2019 Q1 Divvy_Trips export, schema B the 2020 Q1 export.
"""

CANONICAL_COLUMNS = [
    'identifier',
    'vehicle_type',
    'started_at',
    'ended_at',
    'start_station_name',
    'start_station_id',
    'end_station_name',
    'end_station_id',
    'rider_category',
]

# raw header -> canonical name, covering both quarterly layouts
COLUMN_ALIASES = {
    # schema A
    'trip_id': 'identifier',
    'bikeid': 'vehicle_type',
    'start_time': 'started_at',
    'end_time': 'ended_at',
    'from_station_name': 'start_station_name',
    'from_station_id': 'start_station_id',
    'to_station_name': 'end_station_name',
    'to_station_id': 'end_station_id',
    'usertype': 'rider_category',
    # schema A, long-form headers used by some 2019 extracts
    '01 - Rental Details Rental ID': 'identifier',
    '01 - Rental Details Bike ID': 'vehicle_type',
    '01 - Rental Details Local Start Time': 'started_at',
    '01 - Rental Details Local End Time': 'ended_at',
    '03 - Rental Start Station Name': 'start_station_name',
    '03 - Rental Start Station ID': 'start_station_id',
    '02 - Rental End Station Name': 'end_station_name',
    '02 - Rental End Station ID': 'end_station_id',
    'User Type': 'rider_category',
    # schema B
    'ride_id': 'identifier',
    'rideable_type': 'vehicle_type',
    'member_casual': 'rider_category',
}

STRING_COLUMNS = ['identifier', 'vehicle_type', 'start_station_id', 'end_station_id']
TIMESTAMP_COLUMNS = ['started_at', 'ended_at']

CATEGORY_MAP = {
    'Subscriber': 'member',
    'Customer': 'casual',
    'member': 'member',
    'casual': 'casual',
}
RIDER_CATEGORIES = ['casual', 'member']

# bikes taken out of circulation for quality control
MAINTENANCE_STATION = 'HQ QR'

DAY_ORDER = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']

OUTPUT_COLUMNS = [
    'identifier',
    'vehicle_type',
    'rider_category',
    'start_station_name',
    'start_station_id',
    'end_station_name',
    'end_station_id',
    'started_at',
    'ended_at',
    'date',
    'year',
    'month',
    'day',
    'day_of_week',
    'ride_length_seconds',
]


class TripDataError(ValueError):
    """Base class for input batches that do not match the expected trip format."""


class SchemaMismatchError(TripDataError):
    def __init__(self, batch, fields, reason='missing canonical fields'):
        self.batch = batch
        self.fields = list(fields)
        super().__init__(f"{batch}: {reason}: {', '.join(self.fields)}")


class TypeCoercionError(TripDataError):
    def __init__(self, batch, column, row, bad_count, value=None):
        self.batch = batch
        self.column = column
        self.row = row
        self.bad_count = bad_count
        super().__init__(
            f"{batch}: cannot coerce column '{column}' "
            f"(first bad row {row}, value {value!r}; {bad_count} bad rows)"
        )


class UnknownCategoryError(TripDataError):
    def __init__(self, labels):
        self.labels = list(labels)
        super().__init__(f"unknown rider category labels: {self.labels}")
