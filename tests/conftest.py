import pytest

from core.records import BookingRecord, bookings_frame


CSV_HEADER = "arrival_date_year,arrival_date_month,arrival_date_day_of_month,adults,children,babies,country,hotel\n"


def booking(year, month, day, adults, children, babies, country):
    return BookingRecord(
        arrival_date_year=year,
        arrival_date_month=month,
        arrival_date_day_of_month=day,
        adults=adults,
        children=children,
        babies=babies,
        country=country,
    )


@pytest.fixture
def scenario_records():
    """Three bookings over two July days in two countries."""
    return [
        booking(2023, "July", 1, 2, 1, 0, "USA"),
        booking(2023, "July", 1, 1, 0, 0, "France"),
        booking(2023, "July", 2, 3, 0, 1, "USA"),
    ]


@pytest.fixture
def scenario_frame(scenario_records):
    return bookings_frame(scenario_records)


@pytest.fixture
def scenario_csv(tmp_path):
    path = tmp_path / "hotel_bookings_1000.csv"
    path.write_text(
        CSV_HEADER
        + "2023,July,1,2,1,0,USA,Resort Hotel\n"
        + "2023,July,1,1,0,0,France,City Hotel\n"
        + "2023,July,2,3,0,1,USA,City Hotel\n"
        + "\n"
    )
    return path
