import pytest

from TSP_DP.errors import (
    DimensionMismatchError,
    EmptyInputError,
    InputFormatError,
    InputReadError,
    InvalidNumberError,
    MalformedLayoutError,
    TSPFileNotFoundError,
)
from TSP_DP.utils.readTSPInput import (
    format_tsp_text,
    parse_tsp_text,
    read_tsp_input,
    write_tsp_input,
)


def test_matrix_format():
    cities, matrix = parse_tsp_text("A B C\n0 10 15\n10 0 20\n15 20 0")
    assert cities == ["A", "B", "C"]
    assert matrix == [[0.0, 10.0, 15.0], [10.0, 0.0, 20.0], [15.0, 20.0, 0.0]]


def test_list_format():
    cities, matrix = parse_tsp_text("A\nB\nC\n0 10 15\n10 0 20\n15 20 0")
    assert cities == ["A", "B", "C"]
    assert matrix[0] == [0.0, 10.0, 15.0]
    assert matrix[2] == [15.0, 20.0, 0.0]


def test_list_format_keeps_whole_line_as_name():
    text = "Jakarta\nKuala Lumpur\n0 1.5\n1.5 0\n"
    cities, matrix = parse_tsp_text(text)
    assert cities == ["Jakarta", "Kuala Lumpur"]
    assert matrix == [[0.0, 1.5], [1.5, 0.0]]


def test_comments_and_blank_lines():
    text = "# TSP Input\n\nA B C\n# Distance matrix\n   \n0 10 15\n10 0 20\n\n15 20 0\n"
    cities, matrix = parse_tsp_text(text)
    assert len(cities) == 3
    assert len(matrix) == 3


def test_numeric_tokens_in_names_still_matrix_layout():
    cities, _ = parse_tsp_text("1 B\n0 2\n2 0")
    assert cities == ["1", "B"]


def test_scientific_and_signed_numbers():
    _, matrix = parse_tsp_text("A B\n0 1e3\n+2.5 -0")
    assert matrix == [[0.0, 1000.0], [2.5, -0.0]]


@pytest.mark.parametrize("text", ["", "\n\n", "# only\n   # comments\n"])
def test_empty_input(text):
    with pytest.raises(EmptyInputError):
        parse_tsp_text(text)


def test_matrix_layout_needs_two_lines():
    with pytest.raises(MalformedLayoutError, match="at least 2 lines"):
        parse_tsp_text("A B C\n")


def test_list_layout_without_matrix():
    with pytest.raises(MalformedLayoutError, match="Could not find distance matrix"):
        parse_tsp_text("A\nB\nC\n")


def test_list_layout_without_names():
    # all-numeric first line -> list layout with matrix at position 0
    with pytest.raises(MalformedLayoutError):
        parse_tsp_text("0 1\n1 0\n")


def test_invalid_number_reports_row_and_line():
    text = "# header\nA B C\n0 10 15\n\n10 x 20\n15 20 0\n"
    with pytest.raises(InvalidNumberError) as ei:
        parse_tsp_text(text)
    assert ei.value.row == 2
    assert ei.value.line_no == 5
    assert ei.value.token == "x"


@pytest.mark.parametrize("tok", ["inf", "nan", "-inf"])
def test_non_finite_tokens_are_invalid(tok):
    with pytest.raises(InvalidNumberError):
        parse_tsp_text(f"A B\n0 {tok}\n1 0\n")


def test_row_with_wrong_width():
    with pytest.raises(DimensionMismatchError) as ei:
        parse_tsp_text("A B C\n0 10 15\n10 0\n15 20 0")
    err = ei.value
    assert (err.what, err.expected, err.actual, err.row) == ("columns", 3, 2, 2)
    assert "has 2 columns, expected 3" in str(err)


def test_too_few_rows():
    with pytest.raises(DimensionMismatchError) as ei:
        parse_tsp_text("A B C\n0 10 15\n10 0 20\n")
    assert (ei.value.what, ei.value.expected, ei.value.actual) == ("rows", 3, 2)


def test_too_many_rows():
    with pytest.raises(DimensionMismatchError) as ei:
        parse_tsp_text("A\nB\n0 1\n1 0\n2 2\n")
    assert (ei.value.what, ei.value.expected, ei.value.actual) == ("rows", 2, 3)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_tsp_text("")
    assert issubclass(InvalidNumberError, InputFormatError)


def test_read_missing_file(tmp_path):
    with pytest.raises(TSPFileNotFoundError) as ei:
        read_tsp_input(str(tmp_path / "nope.txt"))
    assert ei.value.path.endswith("nope.txt")
    assert isinstance(ei.value, FileNotFoundError)


def test_read_undecodable_file(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"A B\n0 1\n1 0\n\xff\xfe\n")
    with pytest.raises(InputReadError) as ei:
        read_tsp_input(str(path))
    assert ei.value.path == str(path)
    assert "UnicodeDecodeError" in ei.value.reason
    assert isinstance(ei.value, InputFormatError)


@pytest.mark.parametrize("tok", ["1_0", "١", "0x10", "1e", "."])
def test_non_plain_number_tokens_are_invalid(tok):
    with pytest.raises(InvalidNumberError) as ei:
        parse_tsp_text(f"A B\n0 {tok}\n1 0\n")
    assert ei.value.token == tok


def test_underscore_digits_are_names():
    # '1_0' is a name token here, not 10
    cities, matrix = parse_tsp_text("1_0 2_0\n0 3\n3 0\n")
    assert cities == ["1_0", "2_0"]
    assert matrix == [[0.0, 3.0], [3.0, 0.0]]


# ---------------------------------------------------------------------------
#  write / round trip
# ---------------------------------------------------------------------------

def test_matrix_layout_round_trip():
    cities = ["A", "B", "C", "Depot"]
    matrix = [
        [0.0, 0.1, 12345.678, 1e-7],
        [2.0 / 3.0, 0.0, 3.0, 4.5],
        [7.0, 8.25, 0.0, 1e12],
        [9.0, 10.0, 11.0, 0.0],
    ]
    assert parse_tsp_text(format_tsp_text(cities, matrix)) == (cities, matrix)


def test_list_layout_round_trip_with_header():
    cities = ["Jakarta", "Kuala Lumpur", "Ho Chi Minh City"]
    matrix = [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]]
    text = format_tsp_text(cities, matrix, layout="list", header="generated\nthree cities")
    assert text.startswith("# generated\n# three cities\n")
    assert parse_tsp_text(text) == (cities, matrix)


def test_write_and_read_file(tmp_path):
    path = str(tmp_path / "cities.txt")
    write_tsp_input(path, ["X", "Y"], [[0.0, 5.0], [6.0, 0.0]])
    assert read_tsp_input(path) == (["X", "Y"], [[0.0, 5.0], [6.0, 0.0]])


@pytest.mark.parametrize("cities,layout", [
    (["New York", "Boston"], "matrix"),
    (["1", "2"], "matrix"),
    (["#A", "B"], "matrix"),
    (["A", "12"], "list"),
    (["San Jose", "B"], "list"),
])
def test_names_that_cannot_round_trip(cities, layout):
    matrix = [[0.0, 1.0], [1.0, 0.0]]
    with pytest.raises(ValueError):
        format_tsp_text(cities, matrix, layout=layout)


def test_format_rejects_bad_shape():
    with pytest.raises(ValueError):
        format_tsp_text(["A", "B"], [[0.0, 1.0]])
