from changeoverplan.core.models import MergedOperation
from changeoverplan.qco.delta import compare_machines
from changeoverplan.qco.sections import group_sections


def _op(i, section):
    return MergedOperation(
        id=f"OB-{i}", section=section, name=f"op {i}", smv=0.1, machine_type="SNLS", quantity=1, sequence_index=i
    )


def test_groups_follow_contiguous_runs():
    ops = [_op(0, "FRONT"), _op(1, "FRONT"), _op(2, "BACK"), _op(3, "BACK"), _op(4, "BACK")]

    groups = group_sections(ops)

    assert [g.section_name for g in groups] == ["FRONT", "BACK"]
    assert [len(g.operations) for g in groups] == [2, 3]


def test_repeated_section_is_not_merged():
    ops = [_op(0, "BACK"), _op(1, "FRONT"), _op(2, "BACK")]

    assert [g.section_name for g in group_sections(ops)] == ["BACK", "FRONT", "BACK"]


def test_no_operations_no_groups():
    assert group_sections([]) == []


def test_machine_delta_needs():
    delta = compare_machines({"SNLS": 10, "OL": 5}, {"SNLS": 12, "OL": 5, "BARTACK": 2})

    assert [(c.machine_type, c.diff, c.status) for c in delta.comparisons] == [
        ("SNLS", 2, "NEED"),
        ("OL", 0, "OK"),
        ("BARTACK", 2, "NEED"),
    ]
    assert delta.total_needed == 4
    assert delta.total_surplus == 0


def test_machine_delta_surplus_and_missing_types():
    delta = compare_machines({"SNLS": 3, "FLAT": 2}, {"SNLS": 1})

    assert [(c.machine_type, c.current_qty, c.upcoming_qty, c.status) for c in delta.comparisons] == [
        ("SNLS", 3, 1, "SURPLUS"),
        ("FLAT", 2, 0, "SURPLUS"),
    ]
    assert delta.total_needed == 0
    assert delta.total_surplus == 4


def test_machine_delta_empty_inputs():
    delta = compare_machines({}, {})

    assert delta.comparisons == []
    assert (delta.total_needed, delta.total_surplus) == (0, 0)
