import json
from pathlib import Path

import pytest

from vpp_api_gen.codegen.core.config import GeneratorConfig, ParseType
from vpp_api_gen.codegen.core.schema import api_file_from_dict


INTERFACE_TYPES = {
    "types": [
        ["sw_interface_counters", ["u64", "rx_packets"], ["u64", "tx_packets"]],
    ],
    "messages": [],
    "unions": [],
    "enums": [
        [
            "if_status_flags",
            ["IF_STATUS_API_FLAG_ADMIN_UP", 1],
            ["IF_STATUS_API_FLAG_LINK_UP", 2],
            {"enumtype": "u32"},
        ],
        [
            "mtu_proto",
            ["MTU_PROTO_API_L3", 0],
            ["MTU_PROTO_API_IP4", 1],
            {"enumtype": "u8"},
        ],
    ],
    "enumflags": [],
    "services": {},
    "options": {"version": "1.0.0"},
    "aliases": {"interface_index": {"type": "u32"}},
    "vl_api_version": "0x7f2ba79a",
    "imports": [],
}

IP_TYPES = {
    "types": [
        ["address", ["vl_api_address_family_t", "af"], ["vl_api_address_union_t", "un"]],
        ["prefix", ["vl_api_address_t", "address"], ["u8", "len"]],
    ],
    "messages": [],
    "unions": [
        ["address_union", ["vl_api_ip4_address_t", "ip4"], ["vl_api_ip6_address_t", "ip6"]],
    ],
    "enums": [
        ["address_family", ["ADDRESS_IP4", 0], ["ADDRESS_IP6", 1], {"enumtype": "u8"}],
    ],
    "enumflags": [],
    "services": {},
    "options": {"version": "3.0.0"},
    "aliases": {
        "ip4_address": {"type": "u8", "length": 4},
        "ip6_address": {"type": "u8", "length": 16},
    },
    "vl_api_version": "0xfee023ed",
    "imports": ["vnet/interface_types.api"],
}

INTERFACE = {
    "types": [],
    "messages": [
        [
            "sw_interface_set_flags",
            ["u16", "_vl_msg_id"],
            ["u32", "client_index"],
            ["u32", "context"],
            ["vl_api_interface_index_t", "sw_if_index"],
            ["vl_api_if_status_flags_t", "flags"],
            {"crc": "0xf5aec1b8", "comment": "Set flags on the interface"},
        ],
        [
            "sw_interface_set_flags_reply",
            ["u16", "_vl_msg_id"],
            ["u32", "context"],
            ["i32", "retval"],
            {"crc": "0xe8d4e804"},
        ],
        [
            "sw_interface_tag_add_del",
            ["u16", "_vl_msg_id"],
            ["u32", "client_index"],
            ["u32", "context"],
            ["bool", "is_add", {"default": True}],
            ["vl_api_interface_index_t", "sw_if_index"],
            ["string", "tag", 64],
            {"crc": "0x426f8bc1"},
        ],
        [
            "sw_interface_event",
            ["u16", "_vl_msg_id"],
            ["u32", "client_index"],
            ["u32", "pid"],
            ["vl_api_interface_index_t", "sw_if_index"],
            ["vl_api_if_status_flags_t", "flags"],
            ["bool", "deleted"],
            {"crc": "0x2d3d95a7"},
        ],
    ],
    "unions": [],
    "enums": [],
    "enumflags": [],
    "services": {
        "sw_interface_set_flags": {"reply": "sw_interface_set_flags_reply"},
        "sw_interface_tag_add_del": {"reply": "sw_interface_tag_add_del_reply"},
    },
    "options": {"version": "3.2.2"},
    "aliases": {},
    "vl_api_version": "0x1d5d6f1e",
    "imports": ["vnet/interface_types.api", "vnet/ip/ip_types.api"],
}


def write_api(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def interface_types():
    return api_file_from_dict(INTERFACE_TYPES, "core/interface_types.api.json")


@pytest.fixture
def ip_types():
    return api_file_from_dict(IP_TYPES, "ip/ip_types.api.json")


@pytest.fixture
def interface():
    return api_file_from_dict(INTERFACE, "core/interface.api.json")


@pytest.fixture
def api_tree(tmp_path: Path) -> Path:
    """A small VPP API tree: two types files and one service file."""
    root = tmp_path / "api"
    write_api(root / "core" / "interface.api.json", INTERFACE)
    write_api(root / "core" / "interface_types.api.json", INTERFACE_TYPES)
    write_api(root / "ip" / "ip_types.api.json", IP_TYPES)
    return root


@pytest.fixture
def tree_config(api_tree: Path, tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig(
        in_file=str(api_tree),
        parse_type=ParseType.TREE,
        package_name="test-vpp",
        package_path=str(tmp_path / "out"),
    )
