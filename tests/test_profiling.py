import pytest

from data_examiner.ingestion import MISSING, Dataset, Numeric, Text, parse_content, parse_delimited, parse_json
from data_examiner.profiling import (
    ColumnType, DataProfiler, NumericStats, ProfileSettings, TemporalStats, TextStats,
    count_duplicate_rows, infer_column_type, is_categorical, numeric_stats,
)


@pytest.fixture
def profiler():
    return DataProfiler()


def test_numeric_profile_for_basic_example(profiler):
    profile = profiler.profile(parse_content("A,B\n1,2\n3,4\n5,6"))
    column = profile.column("A")
    assert column.inferred_type == ColumnType.NUMERIC
    stats = column.statistics
    assert isinstance(stats, NumericStats)
    assert (stats.min, stats.max, stats.mean, stats.median) == (1, 5, 3, 3)
    assert stats.sum == 9
    assert profile.numeric_columns() == ["A", "B"]


def test_numeric_stats_even_count_median_and_population_stddev():
    stats = numeric_stats([1.0, 2.0, 3.0, 4.0])
    assert stats.median == 2.5
    assert stats.stddev == pytest.approx(1.118034, rel=1e-6)


def test_single_non_numeric_value_demotes_numeric_column(profiler):
    profile = profiler.profile(parse_delimited("v\n1\n2\n3\nn/a\n5\n6\n7\n8\n9\n10"))
    assert profile.column("v").inferred_type in (ColumnType.CATEGORICAL, ColumnType.TEXT)


def test_json_string_numbers_are_numeric(profiler):
    profile = profiler.profile(parse_json('[{"n": "1.5"}, {"n": "2"}, {"n": 3}]'))
    assert profile.column("n").inferred_type == ColumnType.NUMERIC


def test_temporal_profile(profiler):
    profile = profiler.profile(parse_delimited("day\n2024-01-03\n2024-01-01\n2024-01-01T12:00:00\n2024-01-02"))
    column = profile.column("day")
    assert column.inferred_type == ColumnType.TEMPORAL
    stats = column.statistics
    assert isinstance(stats, TemporalStats)
    assert stats.earliest == "2024-01-01"
    assert stats.latest == "2024-01-03"
    assert stats.distinct_day_count == 3


def test_mixed_dates_and_text_fall_back_to_text_types(profiler):
    profile = profiler.profile(parse_delimited("when\n2024-01-01\nsoon\n2024-01-03"))
    assert profile.column("when").inferred_type in (ColumnType.CATEGORICAL, ColumnType.TEXT)


def test_fully_missing_column_is_unknown(profiler):
    dataset = Dataset(records=[{"a": Numeric(1.0), "b": MISSING}, {"a": Numeric(2.0), "b": Text("  ")}])
    profile = profiler.profile(dataset)
    column = profile.column("b")
    assert column.inferred_type == ColumnType.UNKNOWN
    assert column.statistics is None
    assert column.missing_count == 2
    assert "b" not in profile.numeric_columns()
    assert "b" not in profile.categorical_columns()
    assert "b" not in profile.temporal_columns()


def test_categorical_threshold_depends_on_row_count():
    settings = ProfileSettings()
    assert is_categorical(2, 10, settings)
    assert not is_categorical(3, 10, settings)
    assert not is_categorical(11, 1000, settings)


def test_categorical_text_stats(profiler):
    rows = ["color"] + ["red"] * 5 + ["blue"] * 5 + ["green"] * 2 + ["red"] * 3
    profile = profiler.profile(parse_delimited("\n".join(rows) + "\n"))
    column = profile.column("color")
    assert column.inferred_type == ColumnType.CATEGORICAL
    stats = column.statistics
    assert isinstance(stats, TextStats)
    assert stats.unique_count == 3
    assert stats.most_common.value == "red"
    assert stats.most_common.count == 8
    assert stats.most_common.percentage == 53.33
    assert stats.sample_values == ["red", "blue", "green"]


def test_most_common_tie_goes_to_first_encountered(profiler):
    rows = ["x"] + ["b", "a"] * 6
    stats = profiler.profile(parse_delimited("\n".join(rows))).column("x").statistics
    assert stats.most_common.value == "b"
    assert stats.most_common.percentage == 50.0


def test_free_text_column_samples_at_most_five(profiler):
    profile = profiler.profile(parse_content("\n".join(f"line number {i}" for i in range(8))))
    column = profile.column("content")
    assert column.inferred_type == ColumnType.TEXT
    assert len(column.statistics.sample_values) == 5


def test_quality_rollup(profiler):
    dataset = parse_content("a,b\n1,x\n1,x\n2,\n2,")
    profile = profiler.profile(dataset)
    assert profile.total_missing == 2
    assert profile.duplicate_rows == 2


def test_duplicates_ignore_field_order():
    records = [
        {"a": Numeric(1.0), "b": Text("x")},
        {"b": Text("x"), "a": Numeric(1.0)},
    ]
    assert count_duplicate_rows(records) == 1


def test_zero_row_dataset_has_no_columns(profiler):
    profile = profiler.profile(Dataset())
    assert profile.row_count == 0
    assert profile.columns == []
    assert profile.column_count == 0


def test_infer_column_type_of_empty_present_values_is_unknown():
    assert infer_column_type([], 10) == ColumnType.UNKNOWN


def test_profile_summary_shape(profiler):
    summary = profiler.profile(parse_content("A,B\n1,2\n3,4")).to_summary()
    assert summary["rows"] == 2
    assert summary["columns"]["A"]["type"] == "numeric"
    assert summary["columns"]["A"]["missing"] == 0
    assert summary["duplicate_rows"] == 0
