from __future__ import annotations

from pathlib import Path

import allure

from pgrate.cue import CuePaths, cue_paths, export_args, fmt_args, gen_config_steps, vet_args

pytestmark = [
    allure.epic("Configuration"),
    allure.feature("CUE Generation"),
]


def test_cue_paths_for_profile() -> None:
    paths = cue_paths("test", Path("/srv/app"))

    assert paths == CuePaths(
        inputs=(Path("/srv/app/config/cue/schema.cue"), Path("/srv/app/config/cue/test.cue")),
        output=Path("/srv/app/config/test.json"),
    )


def test_cue_args_pass_schema_before_profile() -> None:
    paths = cue_paths("default", Path("root"))
    schema = str(Path("root/config/cue/schema.cue"))
    profile = str(Path("root/config/cue/default.cue"))

    assert vet_args(paths) == ("vet", schema, profile)
    assert fmt_args(paths) == ("fmt", schema, profile)
    assert export_args(paths) == (
        "export",
        schema,
        profile,
        "--force",
        "--out",
        "json",
        "--outfile",
        str(Path("root/config/default.json")),
    )


def test_gen_config_steps_run_vet_then_fmt_then_export() -> None:
    steps = gen_config_steps(cue_paths("default"))

    assert [step[0] for step in steps] == ["vet", "fmt", "export"]
