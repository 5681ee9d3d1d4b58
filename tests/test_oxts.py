import pytest

from conftest import OXTS_LINES
from kitti_dataset.errors import OxtsError
from kitti_dataset.formats.oxts import COLUMNS, Oxts, write_oxts


@pytest.fixture
def oxts_file(tmp_path):
    def _write(text):
        path = tmp_path / "0000.txt"
        path.write_text(text)
        return path
    return _write


def test_columns():
    assert len(COLUMNS) == 30


def test_read_records(oxts_file):
    first, second = Oxts.list_from_path(oxts_file(OXTS_LINES))

    assert first.lat == 49.015003823272
    assert first.lon == 8.4342971002335
    assert first.alt == 116.43032836914
    assert first.yaw == -2.6087069803847
    assert first.velacc == 0.032310686965564
    assert first.navstat == 4
    assert first.numsats == 11
    assert isinstance(first.numsats, int)
    assert (first.posmode, first.velmode, first.orimode) == (6, 6, 6)

    assert second.orimode is None
    assert second.posmode == 6


def test_empty_file(oxts_file):
    assert Oxts.list_from_path(oxts_file("")) == []


def test_write_then_read(oxts_file, tmp_path):
    records = Oxts.list_from_path(oxts_file(OXTS_LINES))
    out = tmp_path / "out.txt"
    write_oxts(records, out)

    assert Oxts.list_from_path(out) == records
    assert out.read_text().splitlines()[1].endswith(" -1")


@pytest.mark.parametrize("tail", [
    "4.5 11 6 6 6",   # fractional navstat
    "4 -1 6 6 6",     # negative satellite count
    "4 11 6 -2 6",    # mode below the unset marker
    "4 11 6 6.5 6",
])
def test_invalid_integer_fields(oxts_file, tail):
    head = " ".join(OXTS_LINES.splitlines()[0].split()[:25])
    with pytest.raises(OxtsError):
        Oxts.list_from_path(oxts_file(f"{head} {tail}\n"))


def test_wrong_column_count(oxts_file):
    line = " ".join(OXTS_LINES.splitlines()[0].split()[:29])
    with pytest.raises(OxtsError, match="expected 30 columns"):
        Oxts.list_from_path(oxts_file(line + "\n"))


def test_non_numeric_value(oxts_file):
    values = OXTS_LINES.splitlines()[0].split()
    values[3] = "north"
    with pytest.raises(OxtsError):
        Oxts.list_from_path(oxts_file(" ".join(values) + "\n"))


def test_oxts_error_is_a_value_error(oxts_file):
    with pytest.raises(ValueError):
        Oxts.list_from_path(oxts_file("1 2 3\n"))
