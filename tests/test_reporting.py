"""Tests for the dataset report and the describe command."""

import json

from forest_data.cli.main import main
from forest_data.data import Dataset, generate_dataset, load_data
from forest_data.eval.reporting import build_attribute_table, build_label_section, write_dataset_report


def _make_rows():
    return ["id1,1.0,red,yes", "id2,2.0,blue,no", "id3,?,red,yes"]


def test_attribute_table_lists_columns():
    dataset = generate_dataset("I,N,C,L", _make_rows())
    table = build_attribute_table(dataset)
    lines = table.splitlines()
    assert lines[0] == "| Column | Kind | Attribute | Distinct Values | Values |"
    assert "| 2 | categorical | 1 | 2 | red, blue |" in lines
    assert "| 0 | ignored | - | - |  |" in lines


def test_label_section_reports_distribution():
    dataset = generate_dataset("I,N,C,L", _make_rows())
    section = build_label_section(load_data(dataset, _make_rows()))
    assert "| 0 | yes | 1 | 0.5000 |" in section
    assert "| 1 | no | 1 | 0.5000 |" in section


def test_write_dataset_report(tmp_path):
    rows = _make_rows()
    dataset = generate_dataset("I,N,C,L", rows)
    data = load_data(dataset, rows)
    path = write_dataset_report(dataset, data, tmp_path / "out", rows_read=len(rows))
    text = path.read_text(encoding="utf-8")
    assert "- Instances loaded: 2" in text
    assert "- Rows skipped (missing values): 1" in text


def test_describe_command_writes_dataset_and_report(tmp_path, capsys):
    data_path = tmp_path / "data.csv"
    data_path.write_text("\n".join(_make_rows()) + "\n", encoding="utf-8")
    output_dir = tmp_path / "results"

    main(["--descriptor", "I N C L", "--data", str(data_path), "--output-dir", str(output_dir)])

    payload = json.loads((output_dir / "dataset.json").read_text(encoding="utf-8"))
    assert payload["descriptor"] == "I,N,C,L"
    assert Dataset.load(output_dir / "dataset.json") == generate_dataset("I,N,C,L", _make_rows())
    assert (output_dir / "dataset_report.md").exists()
    assert "Report written to" in capsys.readouterr().out
