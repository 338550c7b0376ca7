#!/usr/bin/env python3
"""
run_tests.py

Run the C- parser (python -m cminus) on Tests/T01..T04 without modifying the Tests/ folders.
Each folder holds input.txt plus the expected parse_tree.dot (successful parses) and
syntax_errors.txt (the SYNTAX ERROR line, or "No syntax errors.").
Optionally normalize whitespace & line endings before diffing with --normalize / -n.

Place this script in the repo root (siblings: cminus/ and Tests/).
"""

import os
import sys
import subprocess
import difflib
import shutil
import tempfile
import argparse
import re
from pathlib import Path

# ---------- Configuration ----------
NUM_TESTS = 4
TESTS_DIR = Path("Tests")
REPO_ROOT = Path(__file__).parent.resolve()
EXPECTED_FILES = ["parse_tree.dot", "syntax_errors.txt"]
RUN_TIMEOUT_SECONDS = 15

# ---------- Helpers: read file safely ----------
def read_file_safe(path: Path):
    """Return list of lines (with newline) or None if missing. Decode tolerant."""
    try:
        with path.open("rb") as f:
            raw = f.read()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            text = raw.decode("latin-1")
        return text.splitlines(True)
    except FileNotFoundError:
        return None

# ---------- Normalization ----------
_whitespace_re = re.compile(r"[ \t\f\v]+")  # horizontal whitespace runs

def normalize_text_lines(lines):
    """
    Normalize lines:
      - convert CRLF/CR to LF by using splitlines
      - strip leading/trailing whitespace and collapse internal runs to one space
      - remove trailing blank lines at EOF
    """
    if lines is None:
        return None
    normalized = []
    for ln in "".join(lines).splitlines():
        normalized.append(_whitespace_re.sub(" ", ln.strip()) + "\n")
    while normalized and normalized[-1].strip() == "":
        normalized.pop()
    return normalized

# ---------- Diff helper ----------
def unified_diff_str(expected_lines, produced_lines, fromfile, tofile):
    if expected_lines is None and produced_lines is None:
        return ""
    if expected_lines is None:
        return f"Expected file {fromfile} is MISSING; produced {tofile} exists.\n"
    if produced_lines is None:
        return f"Produced file {tofile} is MISSING; expected {fromfile} exists.\n"
    diff = list(difflib.unified_diff(expected_lines, produced_lines,
                                     fromfile=fromfile, tofile=tofile, lineterm=''))
    return "\n".join(diff)

def syntax_error_lines(stderr_text):
    """The parser's error line from stderr, in the syntax_errors.txt layout."""
    errors = [ln + "\n" for ln in stderr_text.splitlines() if ln.startswith("SYNTAX ERROR")]
    return errors or ["No syntax errors.\n"]

# ---------- Single test runner ----------
def run_single_test(test_dir: Path, normalize: bool):
    print(f"\n=== Running test: {test_dir} ===")

    expected_contents = {fname: read_file_safe(test_dir / fname) for fname in EXPECTED_FILES}
    expected_rc = 0 if expected_contents["parse_tree.dot"] is not None else 1

    input_path = test_dir / "input.txt"
    if not input_path.exists():
        print(f"ERROR: test {test_dir} missing input.txt; skipping.")
        return False

    with tempfile.TemporaryDirectory() as tmpdirname:
        tmpdir = Path(tmpdirname)
        shutil.copy2(str(input_path), str(tmpdir / "input.txt"))

        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
        try:
            proc = subprocess.run(
                [sys.executable, "-m", "cminus", "input.txt", "parse_tree.dot"],
                cwd=str(tmpdir),
                env=env,
                capture_output=True,
                text=True,
                timeout=RUN_TIMEOUT_SECONDS
            )
        except subprocess.TimeoutExpired:
            print(f"ERROR: parser timed out after {RUN_TIMEOUT_SECONDS} seconds.")
            return False

        if proc.stdout.strip():
            print("--- parser stdout ---")
            print(proc.stdout.strip())
        if proc.stderr.strip():
            print("--- parser stderr ---")
            print(proc.stderr.strip())

        produced_contents = {
            "parse_tree.dot": read_file_safe(tmpdir / "parse_tree.dot"),
            "syntax_errors.txt": syntax_error_lines(proc.stderr),
        }

        if normalize:
            print("[Normalization enabled] Normalizing whitespace and line endings before diffing.")

        all_pass = True
        for fname in EXPECTED_FILES:
            expected = expected_contents.get(fname)
            produced = produced_contents.get(fname)

            if normalize:
                expected = normalize_text_lines(expected)
                produced = normalize_text_lines(produced)

            diff = unified_diff_str(expected, produced,
                                    f"{test_dir}/{fname} (expected)",
                                    f"{test_dir}/{fname} (produced)")
            if diff:
                all_pass = False
                print(f"\n--- DIFF for {fname} ---")
                print(diff)
            else:
                print(f"\n{fname}: OK (no differences)")

        if all_pass and proc.returncode == expected_rc:
            print(f"\n>>> TEST {test_dir.name} PASS")
            return True
        print(f"\n>>> TEST {test_dir.name} FAIL (return code {proc.returncode}, expected {expected_rc})")
        return False

# ---------- Main ----------
def main(argv):
    parser = argparse.ArgumentParser(description="Run parser golden tests (no modification of Tests/).")
    parser.add_argument("-n", "--normalize", action="store_true",
                        help="Normalize whitespace and line endings before diffing")
    parser.add_argument("-t", "--tests", type=int, default=NUM_TESTS,
                        help=f"Number of tests to run (default {NUM_TESTS})")
    args = parser.parse_args(argv)

    tests_dir = TESTS_DIR if TESTS_DIR.exists() else REPO_ROOT / TESTS_DIR
    print(f"Tests directory: {tests_dir.resolve()}\n")

    results = []
    for i in range(1, args.tests + 1):
        test_name = f"T{i:02d}"
        test_dir = tests_dir / test_name
        if not test_dir.exists():
            print(f"Warning: missing test folder {test_dir}; skipping.")
            results.append((test_name, False, "missing"))
            continue
        ok = run_single_test(test_dir, args.normalize)
        results.append((test_name, ok, None))

    passed = sum(1 for r in results if r[1] is True)
    total = len(results)
    print("\n\n==== SUMMARY ====")
    for name, ok, reason in results:
        if reason:
            status = f"FAIL ({reason})"
        else:
            status = "PASS" if ok else "FAIL"
        print(f"{name}: {status}")
    print(f"\nPassed {passed}/{total} tests.")
    return 0 if passed == total else 1

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
