import csv

from reader import read_column
from varchar_column import main


def write_csv(path, header, rows):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        w = csv.writer(f)
        w.writerow(header)
        w.writerows(rows)


def test_csv_to_column_and_back(tmp_path, capsys):
    csv_path = tmp_path / "in.csv"
    write_csv(str(csv_path), ['id', 'name'], [['1', 'Alice'], ['2', '\\N'], ['3', 'Chandra']])
    col_path = tmp_path / "name.vchr"

    assert main(['csv_to_column', str(csv_path), str(col_path), '--col', 'name']) == 0
    assert "3 rows (1 null)" in capsys.readouterr().out

    name, view = read_column(str(col_path))
    assert name == 'name'
    assert view.to_vec() == ['Alice', None, 'Chandra']

    out_csv = tmp_path / "out.csv"
    assert main(['column_to_csv', str(col_path), str(out_csv)]) == 0
    with open(out_csv, newline='', encoding='utf-8') as f:
        assert list(csv.reader(f)) == [['name'], ['Alice'], ['\\N'], ['Chandra']]


def test_custom_null_marker(tmp_path):
    csv_path = tmp_path / "in.csv"
    write_csv(str(csv_path), ['v'], [['NULL'], ['x']])
    col_path = tmp_path / "v.vchr"
    assert main(['csv_to_column', str(csv_path), str(col_path), '--col', 'v',
                 '--null-marker', 'NULL']) == 0
    assert read_column(str(col_path))[1].to_vec() == [None, 'x']


def test_inspect(tmp_path, capsys):
    csv_path = tmp_path / "in.csv"
    write_csv(str(csv_path), ['v'], [['alpha'], ['\\N'], ['bob']])
    col_path = tmp_path / "v.vchr"
    main(['csv_to_column', str(csv_path), str(col_path), '--col', 'v'])
    capsys.readouterr()

    assert main(['inspect', str(col_path)]) == 0
    out = capsys.readouterr().out
    assert "rows: 3  nulls: 1  data bytes: 12" in out
    assert "NULL" in out
    assert "'alpha'" in out and "'bob'" in out


def test_missing_column_is_runtime_error(tmp_path, capsys):
    csv_path = tmp_path / "in.csv"
    write_csv(str(csv_path), ['a'], [['1']])
    assert main(['csv_to_column', str(csv_path), str(tmp_path / "o.vchr"), '--col', 'b']) == 1
    assert "not found" in capsys.readouterr().err


def test_missing_file_is_runtime_error(tmp_path):
    assert main(['inspect', str(tmp_path / "missing.vchr")]) == 1


def test_usage_error():
    assert main(['no_such_command']) == 2
    assert main(['csv_to_column', 'only_one_arg']) == 2
