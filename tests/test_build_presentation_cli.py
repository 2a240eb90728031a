#!/usr/bin/env python3
"""End-to-end runs of the build_presentation CLI on temporary projects."""
import json
import os
from pathlib import Path

import build_presentation
from codeslides import content_store
from presentation_builder import PresentationBuilder


def run(root: Path, *extra) -> int:
    return build_presentation.main([str(root), *extra])


def read_content(root: Path) -> dict:
    path = root / "presentation" / "presentation-content.json"
    return json.loads(path.read_text(encoding="utf-8"))


def test_first_run_writes_both_artifacts(project, capsys):
    root = project("src/main.ts", "README.md")

    assert run(root) == 0

    out_dir = root / "presentation"
    assert (out_dir / "code-presentation.html").is_file()
    content = read_content(root)
    assert list(content) == ["README.md", "src/main.ts"]
    assert content["src/main.ts"]["title"] == "main.ts"
    output = capsys.readouterr().out
    assert "Creating new content file" in output
    assert "Build complete" in output


def test_second_run_is_idempotent(project):
    root = project("src/main.ts", "src/util.ts", "README.md")
    assert run(root) == 0
    content_path = root / "presentation" / "presentation-content.json"
    html_path = root / "presentation" / "code-presentation.html"
    first_content = content_path.read_text(encoding="utf-8")
    first_html = html_path.read_text(encoding="utf-8")

    assert run(root) == 0

    assert content_path.read_text(encoding="utf-8") == first_content
    assert html_path.read_text(encoding="utf-8") == first_html


def test_author_edits_and_order_survive_rescan(project):
    root = project("a/y.ts", "b/x.ts")
    assert run(root) == 0

    content = read_content(root)
    edited = {
        "__META__": {"projectTitle": "Tour"},
        "intro": {"title": "Welcome", "sections": [{"type": "text", "body": "Hi"}]},
        "b/x.ts": dict(content["b/x.ts"], title="Edited X"),
        "a/y.ts": content["a/y.ts"],
    }
    content_path = root / "presentation" / "presentation-content.json"
    content_path.write_text(json.dumps(edited), encoding="utf-8")
    (root / "c").mkdir()
    (root / "c" / "z.ts").write_text("// z\n", encoding="utf-8")

    builder = PresentationBuilder(root)
    report = builder.build()

    assert report.new_keys == ["c/z.ts"]
    assert report.custom_keys == ["intro"]
    content = read_content(root)
    assert list(content) == ["__META__", "intro", "b/x.ts", "a/y.ts", "c/z.ts"]
    assert content["b/x.ts"]["title"] == "Edited X"

    page = report.html_path.read_text(encoding="utf-8")
    assert "<title>Tour</title>" in page
    assert page.index('data-path="intro"') < page.index('data-path="b/x.ts"') < page.index('data-path="a/y.ts"')
    assert page.index('data-path="a/y.ts"') < page.index('data-path="c/z.ts"')


def test_deleted_file_is_reported_and_kept(project, capsys):
    root = project("keep.ts", "gone.ts")
    assert run(root) == 0
    (root / "gone.ts").unlink()
    capsys.readouterr()

    assert run(root) == 0

    assert "gone.ts" in read_content(root)
    output = capsys.readouterr().out
    assert "Custom/Virtual Slides detected" in output
    assert "   - gone.ts" in output
    page = (root / "presentation" / "code-presentation.html").read_text(encoding="utf-8")
    assert 'data-path="gone.ts"' in page


def test_hidden_entry_is_not_rendered_but_stays_in_store(project):
    root = project("src/secret.ts", "main.ts")
    assert run(root) == 0
    content_path = root / "presentation" / "presentation-content.json"
    content = json.loads(content_path.read_text(encoding="utf-8"))
    content["src/secret.ts"]["show"] = False
    content_path.write_text(json.dumps(content), encoding="utf-8")

    assert run(root) == 0

    assert read_content(root)["src/secret.ts"]["show"] is False
    page = (root / "presentation" / "code-presentation.html").read_text(encoding="utf-8")
    assert "secret.ts" not in page
    assert '"src"' not in page


def test_empty_project_fails_without_writing(tmp_path: Path, capsys):
    root = tmp_path / "empty"
    root.mkdir()

    assert run(root) == 1

    assert not (root / "presentation").exists()
    assert "No files found" in capsys.readouterr().out


def test_missing_template_fails_without_writing(project, monkeypatch, capsys, tmp_path):
    root = project("main.ts")
    monkeypatch.setattr("codeslides.html_builder.PACKAGE_TEMPLATE_DIR", tmp_path / "none")
    monkeypatch.chdir(tmp_path)

    assert run(root, "--template-dir", str(tmp_path / "alsonone")) == 1

    assert not (root / "presentation").exists()
    output = capsys.readouterr().out
    assert "Template directory not found" in output
    assert str(tmp_path / "alsonone") in output


def test_malformed_content_file_is_replaced_by_fresh_store(project, capsys):
    root = project("main.ts")
    out_dir = root / "presentation"
    out_dir.mkdir()
    (out_dir / "presentation-content.json").write_text("{broken", encoding="utf-8")

    assert run(root) == 0

    assert list(read_content(root)) == ["main.ts"]
    assert "Could not read content file" in capsys.readouterr().out


def test_custom_output_dir_and_env_ignore(project, tmp_path, monkeypatch):
    root = project("main.ts", "vendor/lib.js")
    out_dir = tmp_path / "site"
    monkeypatch.setenv("CODESLIDES_IGNORE", "vendor")

    assert run(root, str(out_dir)) == 0

    content = json.loads((out_dir / "presentation-content.json").read_text(encoding="utf-8"))
    assert list(content) == ["main.ts"]
    assert (out_dir / "code-presentation.html").is_file()


def test_conflicting_virtual_path_is_reported(project, capsys):
    root = project("a")
    out_dir = root / "presentation"
    out_dir.mkdir()
    (out_dir / "presentation-content.json").write_text(
        json.dumps({"a/b": {"title": "Under a file"}}), encoding="utf-8"
    )

    report = PresentationBuilder(root).build()

    assert [c.key for c in report.conflicts] == ["a/b"]
    assert "Slide not placed, path blocked: a/b" in capsys.readouterr().out
    assert "a/b" in read_content(root)


def test_rebuild_keeps_stored_entry_exactly_as_written(project):
    root = project("main.ts")
    stored = {
        "main.ts": {
            "title": "Main",
            "notes": "speaker notes",
            "sections": [
                {"type": "quote", "body": "keep me"},
                {"type": "text", "body": "hi", "slot": "middle"},
            ],
        }
    }
    out_dir = root / "presentation"
    out_dir.mkdir()
    (out_dir / "presentation-content.json").write_text(json.dumps(stored), encoding="utf-8")

    assert run(root) == 0
    assert run(root) == 0

    assert read_content(root) == stored
    page = (out_dir / "code-presentation.html").read_text(encoding="utf-8")
    assert "keep me" not in page
    assert "<p>hi</p>" in page


def test_failed_html_write_leaves_content_file_untouched(project, monkeypatch, capsys):
    root = project("main.ts")
    assert run(root) == 0
    content_path = root / "presentation" / "presentation-content.json"
    before = content_path.read_text(encoding="utf-8")
    (root / "extra.ts").write_text("// extra\n", encoding="utf-8")

    real_replace = os.replace

    def failing_replace(src, dst):
        if Path(dst).name == "code-presentation.html":
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(content_store.os, "replace", failing_replace)

    assert run(root) == 1

    assert content_path.read_text(encoding="utf-8") == before
    assert sorted(p.name for p in content_path.parent.iterdir()) == [
        "code-presentation.html",
        "presentation-content.json",
    ]
    assert "disk full" in capsys.readouterr().out
