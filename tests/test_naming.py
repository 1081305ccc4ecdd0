import pytest

from vpp_api_gen.codegen.core.naming import (
    NamingCase,
    camelize,
    camelize_ident,
    convert_case,
    module_name_for,
)
from vpp_api_gen.codegen.languages.rust.naming import (
    is_reserved,
    map_field_identifier,
    map_type_identifier,
    type_name_for,
)


@pytest.mark.parametrize(
    "wire_type, expected",
    [
        ("vl_api_sw_interface_t", "SwInterface"),
        ("vl_api_address_t", "Address"),
        ("vl_api_ip4_address_t", "Ip4Address"),
        ("vl_api_if_status_flags_t", "IfStatusFlags"),
    ],
)
def test_map_type_identifier_strips_prefix_and_suffix(wire_type, expected):
    assert map_type_identifier(wire_type) == expected


def test_map_type_identifier_strips_only_one_occurrence():
    assert map_type_identifier("vl_api_vl_api_foo_t_t") == "VlApiFooT"


def test_map_type_identifier_passthrough():
    assert map_type_identifier("u32") == "u32"
    assert map_type_identifier("bool") == "bool"
    assert map_type_identifier("f64") == "f64"


def test_map_type_identifier_string():
    assert map_type_identifier("string") == "String"


def test_map_field_identifier():
    assert map_field_identifier("type") == "typ"
    assert map_field_identifier("match") == "mach"
    assert map_field_identifier("_foo") == "foo"
    assert map_field_identifier("bar") == "bar"


def test_map_field_identifier_strips_single_underscore():
    assert map_field_identifier("__foo") == "_foo"


def test_type_name_for_definition():
    assert type_name_for("sw_interface_set_flags") == "SwInterfaceSetFlags"


def test_camelize_agrees_with_camelize_ident():
    for name in ["sw_interface", "ip4_address", "address_union", "a_b_c"]:
        assert camelize(name) == camelize_ident(name)


def test_camelize_ident_keeps_segment_tail():
    assert camelize_ident("ip4_mFIB") == "Ip4MFIB"


def test_convert_case():
    assert convert_case("SwInterface", NamingCase.SNAKE_CASE) == "sw_interface"
    assert convert_case("sw_interface", NamingCase.CAMEL_CASE) == "swInterface"
    assert convert_case("sw_interface", NamingCase.SCREAMING_SNAKE) == "SW_INTERFACE"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/usr/share/vpp/api/core/interface_types.api.json", "interface_types"),
        ("vnet/interface_types.api", "interface_types"),
        ("vnet/ip/ip_types.api", "ip_types"),
        ("plugins/acl.api.json", "acl"),
    ],
)
def test_module_name_for(path, expected):
    assert module_name_for(path) == expected


def test_is_reserved():
    assert is_reserved("type")
    assert is_reserved("fn")
    assert not is_reserved("typ")
