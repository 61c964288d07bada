import io
import zipfile

from conftest import make_pdf, page_widths
from pdfsplit.cli import main


def _write_pdf(tmp_path, name="Report.pdf", pages=4):
    path = tmp_path / name
    path.write_bytes(make_pdf(pages))
    return path


def test_by_page_writes_one_file_per_page(tmp_path, capsys):
    src = _write_pdf(tmp_path)
    out_dir = tmp_path / "out"
    assert main(["-f", str(src), "--by-page", "--out_dir", str(out_dir)]) == 0
    names = sorted(p.name for p in out_dir.iterdir())
    assert names == [f"Report-part-{i}.pdf" for i in range(1, 5)]
    assert page_widths((out_dir / "Report-part-3.pdf").read_bytes()) == [2]
    assert "Saved" in capsys.readouterr().out


def test_default_size_keeps_small_file_whole(tmp_path):
    src = _write_pdf(tmp_path)
    out_dir = tmp_path / "out"
    assert main(["-f", str(src), "--out_dir", str(out_dir)]) == 0
    assert [p.name for p in out_dir.iterdir()] == ["Report-part-1.pdf"]


def test_zip_and_slugify(tmp_path):
    src = _write_pdf(tmp_path, name="Annual Report.pdf", pages=3)
    out_dir = tmp_path / "out"
    assert main(["-f", str(src), "--by-page", "--zip", "--slugify", "--out_dir", str(out_dir)]) == 0
    archive = out_dir / "annual-report.zip"
    with zipfile.ZipFile(io.BytesIO(archive.read_bytes())) as zf:
        assert zf.namelist() == [
            "Annual Report-part-1.pdf",
            "Annual Report-part-2.pdf",
            "Annual Report-part-3.pdf",
        ]


def test_config_override_selects_page_mode(tmp_path):
    src = _write_pdf(tmp_path, pages=2)
    out_dir = tmp_path / "out"
    assert main(["-f", str(src), f"pdf_splitter.out_dir={out_dir}", "pdf_splitter.mode=page"]) == 0
    assert len(list(out_dir.iterdir())) == 2


def test_missing_file(tmp_path, capsys):
    assert main(["-f", str(tmp_path / "nope.pdf")]) == 1
    assert "File not found" in capsys.readouterr().err


def test_non_positive_size(tmp_path, capsys):
    src = _write_pdf(tmp_path)
    assert main(["-f", str(src), "-s", "0"]) == 1
    assert "must be positive" in capsys.readouterr().err


def test_corrupt_file_exits_with_error(tmp_path):
    src = tmp_path / "broken.pdf"
    src.write_bytes(b"not a pdf at all")
    assert main(["-f", str(src), "--out_dir", str(tmp_path / "out")]) == 2


def test_empty_pdf_has_nothing_to_split(tmp_path, capsys):
    src = _write_pdf(tmp_path, name="blank.pdf", pages=0)
    assert main(["-f", str(src), "--out_dir", str(tmp_path / "out")]) == 1
    assert "nothing to split" in capsys.readouterr().err


def test_safety_margin_is_taken_off_the_size(tmp_path, capsys):
    src = _write_pdf(tmp_path)
    assert main(["-f", str(src), "-s", "1", "pdf_splitter.safety_margin_mb=1"]) == 1
    assert "must be positive" in capsys.readouterr().err
