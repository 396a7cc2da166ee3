import json
import shlex
import sys
import textwrap

import pytest

import pdftkforms.core.constants as c

# A stand-in for pdftk. It understands the three invocations pdftkforms
# makes and echoes what it was given so tests can check the plumbing:
#   dump_data_fields_utf8 -> contents of $FAKE_PDFTK_DUMP
#   update_info_utf8      -> source bytes + "%INFO" + stdin
#   fill_form             -> source bytes + "%XFDF" + xfdf file [+ "%FLATTEN"]
# Every call is appended as a JSON line to $FAKE_PDFTK_LOG.
# $FAKE_PDFTK_STDERR_<OP> is written to stderr *before* any stdout output;
# $FAKE_PDFTK_LATE_STDERR_<OP> after it. $FAKE_PDFTK_EXIT_<OP> sets the status.
FAKE_PDFTK = textwrap.dedent(
    """
    import json
    import os
    import sys

    args = sys.argv[1:]
    op = args[1] if len(args) > 1 else ""
    env = os.environ

    def read_source():
        if args[0] == "-":
            return sys.stdin.buffer.read()
        with open(args[0], "rb") as f:
            return f.read()

    record = {"argv": args}
    out = b""
    if op == "dump_data_fields_utf8":
        read_source()
        dump = env.get("FAKE_PDFTK_DUMP")
        if dump:
            with open(dump, "rb") as f:
                out = f.read()
    elif op == "update_info_utf8":
        source = read_source()
        info = sys.stdin.buffer.read()
        record["info"] = info.decode("utf-8")
        out = source + b"\\n%INFO\\n" + info
    elif op == "fill_form":
        source = read_source()
        with open(args[2], "rb") as f:
            xfdf = f.read()
        record["xfdf"] = xfdf.decode("utf-8")
        record["source_size"] = len(source)
        out = source + b"\\n%XFDF\\n" + xfdf
        if "flatten" in args:
            out += b"\\n%FLATTEN"

    if env.get("FAKE_PDFTK_LOG"):
        with open(env["FAKE_PDFTK_LOG"], "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\\n")

    key = op.upper()
    early = env.get("FAKE_PDFTK_STDERR_" + key)
    if early:
        sys.stderr.write(early)
        sys.stderr.flush()
    sys.stdout.buffer.write(out)
    sys.stdout.buffer.flush()
    late = env.get("FAKE_PDFTK_LATE_STDERR_" + key)
    if late:
        sys.stderr.write(late)
        sys.stderr.flush()
    sys.exit(int(env.get("FAKE_PDFTK_EXIT_" + key, "0")))
    """
)


class FakePdftk:
    def __init__(self, tmp_path, monkeypatch):
        self.tmp_path = tmp_path
        self.monkeypatch = monkeypatch
        self.script = tmp_path / "fake_pdftk.py"
        self.script.write_text(FAKE_PDFTK, encoding="utf-8")
        self.log = tmp_path / "fake_pdftk.log"
        self.command = [sys.executable, str(self.script)]
        monkeypatch.setenv(c.PDFTK_ENV_VAR, shlex.join(self.command))
        monkeypatch.setenv("FAKE_PDFTK_LOG", str(self.log))

    def set_dump(self, text):
        dump = self.tmp_path / "dump.txt"
        dump.write_text(text, encoding="utf-8")
        self.monkeypatch.setenv("FAKE_PDFTK_DUMP", str(dump))

    def fail(self, operation, stderr="Error: something broke\n", late=False, exit_code=None):
        prefix = "FAKE_PDFTK_LATE_STDERR_" if late else "FAKE_PDFTK_STDERR_"
        if stderr:
            self.monkeypatch.setenv(prefix + operation.upper(), stderr)
        if exit_code is not None:
            self.monkeypatch.setenv("FAKE_PDFTK_EXIT_" + operation.upper(), str(exit_code))

    def calls(self):
        if not self.log.exists():
            return []
        lines = self.log.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines]


@pytest.fixture
def fake_pdftk(tmp_path, monkeypatch):
    """Point pdftkforms at a scripted pdftk stand-in."""
    return FakePdftk(tmp_path, monkeypatch)


@pytest.fixture
def source_pdf(tmp_path):
    """A small file standing in for the source PDF (the fake never parses it)."""
    path = tmp_path / "form.pdf"
    path.write_bytes(b"%PDF-1.4\n% source\n")
    return path


TWO_FIELD_DUMP = """---
FieldType: Text
FieldName: name1
FieldFlags: 0
FieldValue:
FieldJustification: Left
---
FieldType: Button
FieldName: checkbox2
FieldFlags: 0
FieldValue: Off
FieldJustification: Left
FieldStateOption: Off
FieldStateOption: Yes
"""


@pytest.fixture
def two_field_dump():
    return TWO_FIELD_DUMP
