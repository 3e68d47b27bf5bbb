"""Tests for the control-node view of radical outlines."""

from mathbox.surd import SurdGenerator, describe_control_nodes, get_control_nodes


def _buffer():
    points = [0.0] * 96
    # node 0: distinct in-handle, out-handle on the anchor
    points[0:6] = [1.0, 2.0, 0.0, 0.0, 0.0, 0.0]
    # node 1: both handles distinct
    points[6:12] = [3.0, 3.0, 4.0, 4.0, 5.0, 5.5]
    return points


def test_splits_buffer_per_node():
    nodes = get_control_nodes(_buffer())
    assert len(nodes) == 16
    assert [n.index for n in nodes] == list(range(16))
    assert nodes[1].in_handle == (3.0, 3.0)
    assert nodes[1].anchor == (4.0, 4.0)
    assert nodes[1].out_handle == (5.0, 5.5)


def test_handle_presence():
    nodes = get_control_nodes(_buffer())
    assert nodes[0].has_in_handle
    assert not nodes[0].has_out_handle
    assert nodes[1].has_in_handle and nodes[1].has_out_handle
    assert not nodes[5].has_in_handle


def test_custom_node_count():
    assert len(get_control_nodes([0.0] * 12, num_nodes=2)) == 2


def test_describe():
    lines = describe_control_nodes(get_control_nodes(_buffer()))
    assert lines[0] == "#0  anchor=(0.00, 0.00) in=(1.00, 2.00) out=-"
    assert lines[1].startswith("#1  anchor=(4.00, 4.00)")
    assert lines[15].startswith("#15 ")


def test_generated_outline_nodes():
    result = SurdGenerator().generate_path(10, 20)
    nodes = get_control_nodes(result.raw_points)
    peak = nodes[11].anchor
    assert peak == (result.raw_points[11 * 6 + 2], result.raw_points[11 * 6 + 3])
