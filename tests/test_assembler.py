import dataclasses
import io
import logging
import re

import pytest
from rich.console import Console

from vpp_api_gen.codegen.assembler import AssemblyError, PackageAssembler, assemble
from vpp_api_gen.codegen.core.config import GeneratorConfig, ParseType
from vpp_api_gen.loader import ApiLoaderError

from conftest import INTERFACE, IP_TYPES, INTERFACE_TYPES, write_api


def quiet_console():
    return Console(file=io.StringIO(), width=200)


def run(config):
    console = quiet_console()
    result = PackageAssembler(config, console=console).assemble()
    return result, console.file.getvalue()


def test_tree_reports_loaded_count(tree_config):
    result, output = run(tree_config)
    assert result.loaded == 3
    assert "// Loaded 3 API definition files" in output
    assert result.units == []
    assert result.written == []


def test_tree_print_message_names(tree_config, capsys):
    config = dataclasses.replace(tree_config, print_message_names=True)
    result, output = run(config)
    lines = output.splitlines()
    assert "sw_interface_set_flags_f5aec1b8" in lines
    assert "sw_interface_event_2d3d95a7" in lines
    assert lines[1].endswith("interface.api.json")
    assert result.message_names[0] == lines[1]
    assert capsys.readouterr().out == ""


def test_tree_generate_code_in_load_order(tree_config, tmp_path):
    config = dataclasses.replace(tree_config, generate_code=True)
    result, _ = run(config)
    assert [u.path for u in result.units] == [
        "src/interface.rs",
        "src/interface_types.rs",
        "src/ip_types.rs",
    ]
    root = tmp_path / "out" / "test-vpp"
    assert (root / "src" / "interface.rs").read_text() == result.units[0].text
    assert "SizedEnum<IfStatusFlags, u32>" in result.units[0].text


def test_binding_order_puts_types_files_first(tree_config):
    config = dataclasses.replace(tree_config, generate_code=True, create_binding=True)
    result, _ = run(config)
    assert [u.path for u in result.units] == [
        "src/interface_types.rs",
        "src/ip_types.rs",
        "src/interface.rs",
    ]


def test_create_binding_without_generate_code(tree_config, tmp_path):
    config = dataclasses.replace(tree_config, create_binding=True)
    result, _ = run(config)
    assert [u.path for u in result.units] == [
        "src/interface_types.rs",
        "src/ip_types.rs",
        "src/interface.rs",
    ]
    root = tmp_path / "out" / "test-vpp"
    assert result.written == [root / u.path for u in result.units]
    assert not (root / "Cargo.toml").exists()


def test_binding_is_emitted_once(tree_config):
    config = dataclasses.replace(
        tree_config, generate_code=True, create_binding=True, create_package=True
    )
    result, _ = run(config)
    assert len(result.units) == 3


def test_types_file_with_fewer_imports_goes_first(tmp_path):
    # a_types imports b_types, so b_types (no imports) must come first
    root = tmp_path / "api"
    write_api(root / "a_types.api.json", {**IP_TYPES, "imports": ["b_types.api"]})
    write_api(root / "b_types.api.json", INTERFACE_TYPES)
    config = GeneratorConfig(
        in_file=str(root),
        parse_type=ParseType.TREE,
        package_path=str(tmp_path / "out"),
        generate_code=True,
        create_binding=True,
    )
    result, _ = run(config)
    assert [u.path for u in result.units] == ["src/b_types.rs", "src/a_types.rs"]


def test_create_package_scaffolding(tree_config, tmp_path):
    config = dataclasses.replace(tree_config, generate_code=True, create_package=True)
    result, _ = run(config)

    root = tmp_path / "out" / "test-vpp"
    for name in ("src", "tests", "examples"):
        assert (root / name).is_dir()

    lib_rs = (root / "src" / "lib.rs").read_text()
    assert "pub mod interface;\npub mod interface_types;\npub mod ip_types;\n" in lib_rs

    cargo = (root / "Cargo.toml").read_text()
    assert 'name = "test-vpp"' in cargo
    assert f"vpp-api-transport = {config.vppapi_opts}" in cargo

    test_rs = (root / "tests" / "interface_test.rs").read_text()
    assert "test-vpp" in test_rs
    assert "use test_vpp::interface::*;" in test_rs
    assert (root / "examples" / "progressive_vpp.rs").is_file()

    assert [u.path for u in result.units][0] == "src/interface_types.rs"
    assert root / "src" / "ip_types.rs" in result.written


def test_create_package_without_generate_code(tree_config, tmp_path):
    config = dataclasses.replace(tree_config, create_package=True)
    result, _ = run(config)
    root = tmp_path / "out" / "test-vpp"
    assert (root / "Cargo.toml").is_file()

    lib_rs = (root / "src" / "lib.rs").read_text()
    modules = re.findall(r"^pub mod (\w+);$", lib_rs, re.MULTILINE)
    assert modules == ["interface", "interface_types", "ip_types"]
    for module in modules:
        assert (root / "src" / f"{module}.rs").is_file(), module
    assert [u.path for u in result.units][0] == "src/interface_types.rs"


def test_package_path_is_a_file(tree_config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config = dataclasses.replace(tree_config, package_path=str(blocker), create_package=True)
    with pytest.raises(AssemblyError, match="blocker"):
        run(config)


def test_unmatched_import_warns(tmp_path, caplog):
    root = tmp_path / "api"
    write_api(root / "interface.api.json", INTERFACE)
    config = GeneratorConfig(in_file=str(root), parse_type=ParseType.TREE)
    with caplog.at_level(logging.WARNING, logger="vpp_api_gen"):
        result, _ = run(config)
    assert len([w for w in result.warnings if "does not match" in w]) == 2
    assert "vnet/interface_types.api" in caplog.text


def test_tree_skips_broken_files(api_tree):
    (api_tree / "broken.api.json").write_text("[", encoding="utf-8")
    config = GeneratorConfig(in_file=str(api_tree), parse_type=ParseType.TREE)
    result, output = run(config)
    assert result.loaded == 3
    assert "// Loaded 3 API definition files" in output


def test_file_mode_summary(api_tree):
    path = api_tree / "ip" / "ip_types.api.json"
    config = GeneratorConfig(in_file=str(path))
    result, output = run(config)
    assert result.loaded == 1
    assert "version: 0xfee023ed" in output
    assert "types: 2" in output
    assert "unions: 1" in output
    assert result.units == []


def test_file_mode_generate_code(api_tree, tmp_path):
    path = api_tree / "ip" / "ip_types.api.json"
    config = GeneratorConfig(in_file=str(path), generate_code=True, package_path=str(tmp_path / "gen"))
    result, _ = run(config)
    assert result.written == [tmp_path / "gen" / "ip_types.rs"]
    assert "pub enum AddressFamily" in result.written[0].read_text()


def test_file_mode_failure_is_fatal(tmp_path):
    path = tmp_path / "broken.api.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ApiLoaderError):
        run(GeneratorConfig(in_file=str(path)))


def test_api_type_mode(tmp_path):
    path = write_api(tmp_path / "prefix.json", IP_TYPES["types"][1])
    out = tmp_path / "prefix.rs"
    config = GeneratorConfig(in_file=str(path), parse_type=ParseType.API_TYPE, out_file=str(out))
    result, _ = run(config)
    assert result.written == [out]
    assert "pub struct Prefix {" in out.read_text()


def test_api_message_mode_stdout(tmp_path, capsys):
    path = write_api(tmp_path / "msg.json", INTERFACE["messages"][0])
    config = GeneratorConfig(in_file=str(path), parse_type=ParseType.API_MESSAGE, out_file="-")
    result, _ = run(config)
    assert result.written == []
    out = capsys.readouterr().out
    assert "impl VppApiMessage for SwInterfaceSetFlags {" in out


def test_assemble_helper(tree_config):
    result = assemble(tree_config, console=quiet_console())
    assert result.loaded == 3
