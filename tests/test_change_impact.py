from __future__ import annotations

from pathlib import Path

import pytest

from contract.models import ModuleRecord, ResolutionResult
from graph.impact import collect_all_files, filter_related_files, is_affected, is_under
from graph.resolver import analyze


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _module_call(name: str, source: str) -> str:
    return f'module "{name}" {{\n  source = "{source}"\n}}\n'


def _write_two_module_stack(tmp_path: Path) -> tuple[Path, Path, Path]:
    root_dir = tmp_path / "root"
    vpc_dir = tmp_path / "modules" / "vpc"
    iam_dir = tmp_path / "modules" / "iam"
    _write(
        root_dir / "main.tf",
        _module_call("vpc", "../modules/vpc") + _module_call("iam", "../modules/iam"),
    )
    _write(vpc_dir / "main.tf", "")
    _write(vpc_dir / "variables.tf", "")
    _write(iam_dir / "main.tf", "")
    return root_dir.resolve(), vpc_dir.resolve(), iam_dir.resolve()


@pytest.mark.parametrize(
    ("file_path", "dir_path", "expected"),
    [
        ("/a/b/c/file.tf", "/a/b/c", True),
        ("/a/b/c/d/file.tf", "/a/b/c", True),
        ("/a/b/file.tf", "/a/b/c", False),
        ("/a/b/c", "/a/b/c", True),
        ("/other/path/file.tf", "/a/b/c", False),
        ("/a/b/cd/file.tf", "/a/b/c", False),
        ("/a/b/c/..file.tf", "/a/b/c", True),
    ],
)
def test_is_under(file_path: str, dir_path: str, expected: bool) -> None:
    assert is_under(file_path, dir_path) is expected


def test_collect_all_files_root_first_without_duplicates(tmp_path: Path) -> None:
    root_dir = tmp_path / "root"
    vpc_dir = tmp_path / "modules" / "vpc"
    _write(root_dir / "main.tf", _module_call("vpc", "../modules/vpc"))
    _write(root_dir / "variables.tf", "")
    _write(vpc_dir / "main.tf", "")
    _write(vpc_dir / "outputs.tf", "")

    result = analyze(root_dir)
    files = collect_all_files(result)

    root_dir = root_dir.resolve()
    vpc_dir = vpc_dir.resolve()
    assert files == [
        str(root_dir / "main.tf"),
        str(root_dir / "variables.tf"),
        str(vpc_dir / "main.tf"),
        str(vpc_dir / "outputs.tf"),
    ]
    assert len(files) == len(set(files))


def test_collect_all_files_deduplicates_shared_paths() -> None:
    result = ResolutionResult(
        root_module=ModuleRecord(resolved_path="/r", files=["/r/main.tf"]),
        local_modules=[
            ModuleRecord(
                name="self",
                source="./",
                resolved_path="/r",
                files=["/r/main.tf"],
            ),
            ModuleRecord(
                name="m",
                source="./m",
                resolved_path="/r/m",
                files=["/r/m/main.tf"],
            ),
        ],
    )

    assert collect_all_files(result) == ["/r/main.tf", "/r/m/main.tf"]


def test_is_affected(tmp_path: Path) -> None:
    root_dir, vpc_dir, _ = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)

    assert is_affected([str(root_dir / "main.tf")], result) is True
    assert is_affected([str(vpc_dir / "main.tf")], result) is True
    assert is_affected([str(vpc_dir / "nested" / "new.tf")], result) is True
    assert is_affected(["/some/other/path/file.tf"], result) is False
    assert is_affected([], result) is False


def test_is_affected_resolves_relative_paths_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root_dir, _, _ = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)

    monkeypatch.chdir(tmp_path)

    assert is_affected(["modules/iam/main.tf"], result) is True
    assert is_affected(["modules/other/main.tf"], result) is False
    assert is_affected(["root/../modules/vpc/variables.tf"], result) is True


def test_filter_related_files_to_single_module(tmp_path: Path) -> None:
    root_dir, vpc_dir, _ = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)
    all_files = collect_all_files(result)

    filtered = filter_related_files(all_files, [str(vpc_dir / "main.tf")], result)

    assert filtered == [str(vpc_dir / "main.tf"), str(vpc_dir / "variables.tf")]


def test_filter_related_files_to_root_module(tmp_path: Path) -> None:
    root_dir, _, _ = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)
    all_files = collect_all_files(result)

    filtered = filter_related_files(all_files, [str(root_dir / "main.tf")], result)

    assert filtered == [str(root_dir / "main.tf")]


def test_filter_related_files_keeps_module_order(tmp_path: Path) -> None:
    root_dir, vpc_dir, iam_dir = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)
    all_files = collect_all_files(result)

    changed = [str(iam_dir / "main.tf"), str(root_dir / "main.tf"), str(vpc_dir)]
    filtered = filter_related_files(all_files, changed, result)

    assert filtered == all_files


def test_filter_related_files_no_match(tmp_path: Path) -> None:
    root_dir, _, _ = _write_two_module_stack(tmp_path)
    result = analyze(root_dir)
    all_files = collect_all_files(result)

    assert filter_related_files(all_files, ["/some/other/path/file.tf"], result) == []
    assert filter_related_files(all_files, [], result) == []


def test_filter_related_files_includes_enclosing_module(tmp_path: Path) -> None:
    root_dir = tmp_path / "root"
    net_dir = tmp_path / "modules" / "net"
    sub_dir = net_dir / "sub"
    _write(root_dir / "main.tf", _module_call("net", "../modules/net"))
    _write(net_dir / "main.tf", _module_call("sub", "./sub"))
    _write(net_dir / "outputs.tf", "")
    _write(sub_dir / "main.tf", "")
    result = analyze(root_dir)
    all_files = collect_all_files(result)

    net_dir = net_dir.resolve()
    sub_dir = sub_dir.resolve()
    changed = [str(sub_dir / "main.tf")]
    filtered = filter_related_files(all_files, changed, result)

    assert is_affected(changed, result)
    assert filtered == [
        str(net_dir / "main.tf"),
        str(net_dir / "outputs.tf"),
        str(sub_dir / "main.tf"),
    ]
