from conftest import make_item
from config import save_groups
from split_report import main


def test_report_prints_totals(tmp_path, capsys, abc_group):
    data = str(tmp_path / "groups.json")
    save_groups([abc_group], data)

    assert main(["dinner", "--data", data]) == 0

    out = capsys.readouterr().out
    assert "Dinner" in out
    assert "Ana" in out and "4.00" in out
    assert "24.00" in out


def test_report_exports_excel(tmp_path, abc_group):
    data = str(tmp_path / "groups.json")
    save_groups([abc_group], data)
    xlsx = tmp_path / "out.xlsx"

    assert main([abc_group.id, "--data", data, "--excel", str(xlsx)]) == 0
    assert xlsx.exists()


def test_report_flags_invalid_group(tmp_path, abc_group):
    abc_group.items.append(make_item("orphan", 50, people=[]))
    data = str(tmp_path / "groups.json")
    save_groups([abc_group], data)

    assert main(["Dinner", "--data", data]) == 2


def test_report_unknown_group(tmp_path):
    assert main(["nope", "--data", str(tmp_path / "missing.json")]) == 1
