from __future__ import annotations

import dataclasses
import datetime
import io
import threading
from typing import Optional

import pytest
from pydantic import BaseModel

from interceptors import (
    AliasInterceptor,
    CallableValueInterceptor,
    SnakeCaseInterceptor,
    StripWhitespaceInterceptor,
    TypeConversionInterceptor,
)
from mapping.errors import (
    DuplicateHeaderColumnError,
    InterceptorError,
    PipelineFrozenError,
    PropertyNotFoundError,
    RowProcessingError,
    SharedStringIndexOutOfRangeError,
    SheetNotFoundError,
)
from mapping.factory import create_default_parser
from mapping.orchestrator import ExcelRecordParser
from xlsx_builder import cell, row


class Person(BaseModel):
    first_name: str
    age: int
    active: bool = False


@dataclasses.dataclass
class PascalPerson:
    FirstName: Optional[str] = None
    Age: int = 0


@dataclasses.dataclass
class NameOnly:
    FirstName: Optional[str] = None


def _pascal_parser() -> ExcelRecordParser:
    return ExcelRecordParser(
        name_interceptors=[StripWhitespaceInterceptor()],
        value_interceptors=[TypeConversionInterceptor()],
    )


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

def test_parses_people_sheet(people_xlsx):
    records = create_default_parser(name_style="snake").parse(Person, people_xlsx)

    assert records == [
        Person(first_name="John", age=30, active=True),
        Person(first_name="Jane", age=41, active=False),
    ]


def test_header_names_through_strip_whitespace(raw_xlsx):
    path = raw_xlsx([(
        "Sheet1",
        row(1, cell("A1", "First Name", "inlineStr"), cell("B1", "Age", "inlineStr"))
        + row(2, cell("A2", "John", "inlineStr"), cell("B2", "30")),
    )])

    records = _pascal_parser().parse(PascalPerson, path)

    assert records == [PascalPerson(FirstName="John", Age=30)]


def test_blank_rows_are_omitted(raw_xlsx):
    path = raw_xlsx([(
        "Sheet1",
        row(1, cell("A1", "First Name", "inlineStr"), cell("B1", "Age", "inlineStr"))
        + row(2, cell("A2", "John", "inlineStr"), cell("B2", "30"))
        + row(3, cell("B3", "0"))
        + row(4)
        + row(5, cell("A5", "Jane", "inlineStr")),
    )])

    records = _pascal_parser().parse(PascalPerson, path)

    assert [r.FirstName for r in records] == ["John", "Jane"]


def test_header_only_and_empty_sheets(raw_xlsx):
    header_only = raw_xlsx([("S", row(1, cell("A1", "First Name", "inlineStr")))])
    empty = raw_xlsx([("S", "")])

    assert _pascal_parser().parse(NameOnly, header_only) == []
    assert _pascal_parser().parse(NameOnly, empty) == []


def test_openpyxl_workbook_with_dates(openpyxl_xlsx):
    @dataclasses.dataclass
    class Shipment:
        reference: Optional[str] = None
        shipped_on: Optional[datetime.date] = None
        weight: float = 0.0

    path = openpyxl_xlsx({
        "Shipments": [
            ["Reference", "Shipped On", "Weight"],
            ["S-1", datetime.date(2023, 3, 15), 12.5],
            [None, None, None],
            ["S-2", None, 3],
        ],
    })

    records = create_default_parser(name_style="snake").parse(Shipment, path, sheet_name="Shipments")

    assert records == [
        Shipment(reference="S-1", shipped_on=datetime.date(2023, 3, 15), weight=12.5),
        Shipment(reference="S-2", shipped_on=None, weight=3.0),
    ]


def test_stream_source(people_xlsx):
    stream = io.BytesIO(people_xlsx.read_bytes())

    records = create_default_parser(name_style="snake").parse(Person, stream)

    assert [r.first_name for r in records] == ["John", "Jane"]
    assert not stream.closed


def test_alias_and_pydantic_field_alias(raw_xlsx):
    from pydantic import Field

    class Contact(BaseModel):
        email: str
        last_name: Optional[str] = Field(default=None, alias="Surname")

    path = raw_xlsx([(
        "S",
        row(1, cell("A1", "E-Mail", "inlineStr"), cell("B1", "Surname", "inlineStr"))
        + row(2, cell("A2", "jd@example.com", "inlineStr"), cell("B2", "Doe", "inlineStr")),
    )])
    parser = ExcelRecordParser(
        name_interceptors=[AliasInterceptor({"E-Mail": "email"})],
        value_interceptors=[TypeConversionInterceptor()],
    )

    records = parser.parse(Contact, path)

    assert records[0].email == "jd@example.com"
    assert records[0].last_name == "Doe"


# ---------------------------------------------------------------------------
# Sheet selection
# ---------------------------------------------------------------------------

def test_selects_sheet_by_name(raw_xlsx):
    path = raw_xlsx([
        ("One", row(1, cell("A1", "First Name", "inlineStr")) + row(2, cell("A2", "a", "inlineStr"))),
        ("Two", row(1, cell("A1", "First Name", "inlineStr")) + row(2, cell("A2", "b", "inlineStr"))),
    ])

    assert _pascal_parser().parse(NameOnly, path) == [NameOnly("a")]
    assert _pascal_parser().parse(NameOnly, path, sheet_name="Two") == [NameOnly("b")]


def test_chartsheets_are_skipped(raw_xlsx):
    path = raw_xlsx(
        [("Data", row(1, cell("A1", "First Name", "inlineStr")) + row(2, cell("A2", "a", "inlineStr")))],
        chartsheets=["Chart"],
    )

    assert _pascal_parser().parse(NameOnly, path) == [NameOnly("a")]
    with pytest.raises(SheetNotFoundError):
        _pascal_parser().parse(NameOnly, path, sheet_name="Chart")


def test_unknown_sheet(people_xlsx):
    with pytest.raises(SheetNotFoundError) as info:
        _pascal_parser().parse(NameOnly, people_xlsx, sheet_name="Missing")
    assert info.value.sheet_name == "Missing"
    assert "Missing" in str(info.value)


def test_workbook_without_worksheets(raw_xlsx):
    path = raw_xlsx([], chartsheets=["Chart"])
    with pytest.raises(SheetNotFoundError) as info:
        _pascal_parser().parse(NameOnly, path)
    assert info.value.sheet_name is None


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

def test_missing_property_fails_the_row(raw_xlsx):
    path = raw_xlsx([(
        "S",
        row(1, cell("A1", "Age", "inlineStr")) + row(2, cell("A2", "30")),
    )])

    with pytest.raises(RowProcessingError) as info:
        _pascal_parser().parse(NameOnly, path)

    assert info.value.row_index == 2
    cause = info.value.__cause__
    assert isinstance(cause, PropertyNotFoundError)
    assert cause.column == "A"
    assert cause.property_name == "Age"
    assert "row 2" in str(info.value)


def test_row_index_comes_from_the_sheet(raw_xlsx):
    path = raw_xlsx([(
        "S",
        row(1, cell("A1", "Age", "inlineStr")) + row(7, cell("A7", "x")),
    )])

    with pytest.raises(RowProcessingError) as info:
        _pascal_parser().parse(PascalPerson, path)

    assert info.value.row_index == 7
    assert isinstance(info.value.__cause__, InterceptorError)


def test_shared_string_out_of_range_in_data_row(raw_xlsx):
    path = raw_xlsx(
        [("S", row(1, cell("A1", "0", "s")) + row(2, cell("A2", "9", "s")))],
        shared_strings=["First Name"],
    )

    with pytest.raises(RowProcessingError) as info:
        _pascal_parser().parse(NameOnly, path)

    cause = info.value.__cause__
    assert isinstance(cause, SharedStringIndexOutOfRangeError)
    assert cause.reference == "A2"
    assert cause.index == 9


def test_header_errors_are_not_row_errors(raw_xlsx):
    duplicate = raw_xlsx([("S", row(1, cell("A1", "x", "inlineStr"), cell("A1", "y", "inlineStr")))])
    with pytest.raises(DuplicateHeaderColumnError):
        _pascal_parser().parse(NameOnly, duplicate)

    no_table = raw_xlsx([("S", row(1, cell("A1", "0", "s")))])
    with pytest.raises(SharedStringIndexOutOfRangeError):
        _pascal_parser().parse(NameOnly, no_table)


def test_no_partial_results_on_failure(raw_xlsx):
    path = raw_xlsx([(
        "S",
        row(1, cell("A1", "First Name", "inlineStr"), cell("B1", "Age", "inlineStr"))
        + row(2, cell("A2", "John", "inlineStr"), cell("B2", "30"))
        + row(3, cell("A3", "Jane", "inlineStr"), cell("B3", "forty")),
    )])

    with pytest.raises(RowProcessingError) as info:
        _pascal_parser().parse(PascalPerson, path)
    assert info.value.row_index == 3


# ---------------------------------------------------------------------------
# Pipelines
# ---------------------------------------------------------------------------

def test_value_interceptor_order_is_applied(raw_xlsx):
    path = raw_xlsx([(
        "S",
        row(1, cell("A1", "Age", "inlineStr")) + row(2, cell("A2", "4")),
    )])
    parser = _pascal_parser()
    # Runs after type conversion, so it sees an int.
    parser.value_interceptors.add(CallableValueInterceptor(lambda p, o, c: c * 10, order=200))

    assert parser.parse(PascalPerson, path) == [PascalPerson(Age=40)]


def test_frozen_parser_can_be_shared(people_xlsx):
    parser = create_default_parser(name_style="snake").freeze()
    with pytest.raises(PipelineFrozenError):
        parser.name_interceptors.add(SnakeCaseInterceptor())

    results = []

    def work():
        results.append(parser.parse(Person, people_xlsx))

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 4
    assert all(len(r) == 2 for r in results)


# ---------------------------------------------------------------------------
# Sparse rows
# ---------------------------------------------------------------------------

class SparseModel(BaseModel):
    first_name: str
    age: int


@dataclasses.dataclass
class SparseData:
    first_name: str
    age: int


class SparsePlain:
    first_name: str
    age: int


@pytest.fixture
def sparse_xlsx(raw_xlsx):
    return raw_xlsx([(
        "S",
        row(1, cell("A1", "First Name", "inlineStr"), cell("B1", "Age", "inlineStr"))
        + row(2, cell("A2", "John", "inlineStr")),
    )])


def test_sparse_row_on_pydantic_model(sparse_xlsx):
    records = create_default_parser(name_style="snake").parse(SparseModel, sparse_xlsx)

    assert len(records) == 1
    assert records[0].model_dump() == {"first_name": "John", "age": 0}


def test_sparse_row_on_dataclass(sparse_xlsx):
    records = create_default_parser(name_style="snake").parse(SparseData, sparse_xlsx)

    assert records == [SparseData(first_name="John", age=0)]


def test_sparse_row_on_plain_class(sparse_xlsx):
    records = create_default_parser(name_style="snake").parse(SparsePlain, sparse_xlsx)

    assert len(records) == 1
    assert vars(records[0]) == {"first_name": "John", "age": 0}
