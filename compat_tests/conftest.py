# compat_tests/conftest.py
import io
import shutil

import pikepdf
import pytest


@pytest.fixture(scope="session")
def pdftk_executable():
    """Path of the real pdftk; tests in this directory are skipped without it."""
    path = shutil.which("pdftk")
    if not path:
        pytest.skip("pdftk missing")
    return path


def _checkbox_appearances(pdf):
    on = pdf.make_stream(b"0 g 2 2 11 11 re f")
    on.Type = pikepdf.Name.XObject
    on.Subtype = pikepdf.Name.Form
    on.BBox = [0, 0, 15, 15]
    off = pdf.make_stream(b"")
    off.Type = pikepdf.Name.XObject
    off.Subtype = pikepdf.Name.Form
    off.BBox = [0, 0, 15, 15]
    return pikepdf.Dictionary(N=pikepdf.Dictionary(Off=off, Yes=on))


@pytest.fixture
def form_pdf(tmp_path):
    """
    A one-page form with a text field "name1" and a checkbox "checkbox2"
    (states Off/Yes).
    """
    pdf = pikepdf.new()
    pdf.add_blank_page()
    helv = pdf.make_indirect(
        pikepdf.Dictionary(
            Type=pikepdf.Name.Font,
            Subtype=pikepdf.Name.Type1,
            BaseFont=pikepdf.Name.Helvetica,
            Encoding=pikepdf.Name.WinAnsiEncoding,
        )
    )
    pdf.Root.AcroForm = pikepdf.Dictionary(
        Fields=pikepdf.Array(),
        DA=pikepdf.String("/Helv 0 Tf 0 g"),
        DR=pikepdf.Dictionary(Font=pikepdf.Dictionary(Helv=helv)),
    )

    text = pikepdf.Dictionary(
        Type=pikepdf.Name.Annot,
        Subtype=pikepdf.Name.Widget,
        FT=pikepdf.Name.Tx,
        T=pikepdf.String("name1"),
        DA=pikepdf.String("/Helv 12 Tf 0 g"),
        F=4,
        Rect=[50, 700, 300, 720],
    )
    checkbox = pikepdf.Dictionary(
        Type=pikepdf.Name.Annot,
        Subtype=pikepdf.Name.Widget,
        FT=pikepdf.Name.Btn,
        T=pikepdf.String("checkbox2"),
        V=pikepdf.Name.Off,
        AS=pikepdf.Name.Off,
        F=4,
        Rect=[50, 650, 65, 665],
        AP=_checkbox_appearances(pdf),
    )

    annots = pdf.make_indirect(pikepdf.Array())
    pdf.pages[0].Annots = annots
    for field in (text, checkbox):
        field.P = pdf.pages[0].obj
        ind = pdf.make_indirect(field)
        pdf.Root.AcroForm.Fields.append(ind)
        annots.append(ind)

    path = tmp_path / "form.pdf"
    pdf.save(path)
    return path


@pytest.fixture
def save_stream(tmp_path):
    """Drain a fill() stream into a file and return its path."""

    def _save(stream, name="out.pdf"):
        out = tmp_path / name
        with stream, out.open("wb") as f:
            shutil.copyfileobj(stream, f)
        return out

    return _save


@pytest.fixture
def open_output():
    def _open(path):
        return pikepdf.open(io.BytesIO(path.read_bytes()))

    return _open


def pytest_collection_modifyitems(items):
    """Automatically mark all tests in this directory as needing pdftk"""
    for item in items:
        if item.nodeid.startswith("compat_tests/"):
            item.add_marker("pdftk")
