from __future__ import annotations

import pytest

from tfconfig.sources import is_local_source


@pytest.mark.parametrize(
    "source",
    [
        "./modules/vpc",
        "../modules/vpc",
        "../../shared/modules",
        "./",
    ],
)
def test_relative_sources_are_local(source: str) -> None:
    assert is_local_source(source) is True


@pytest.mark.parametrize(
    "source",
    [
        "terraform-aws-modules/eks/aws",
        "git::https://github.com/org/repo.git",
        "s3::https://bucket.s3.amazonaws.com/module.zip",
        "registry.terraform.io/hashicorp/consul/aws",
        "github.com/hashicorp/example",
        "modules/vpc",
        ".modules/vpc",
        "",
    ],
)
def test_non_relative_sources_are_remote(source: str) -> None:
    assert is_local_source(source) is False


def test_absolute_paths_are_classified_remote() -> None:
    assert is_local_source("/opt/terraform/modules/vpc") is False
    assert is_local_source("C:\\terraform\\modules\\vpc") is False
    assert is_local_source(".\\modules\\vpc") is False
