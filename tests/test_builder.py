import unittest

from link_tree.builder import attempt_budget, build, build_link_tree
from link_tree.errors import DuplicateNameError
from link_tree.records import FlatRecord
from link_tree.tree import ROOT_NAME
from link_tree.visualizer import tree_to_dict


def _rec(name: str, parent: str | None = None, url: str | None = None) -> FlatRecord:
    return FlatRecord(name=name, url=url, parent_name=parent)


def _child_names(node) -> list[str]:
    return [child.name for child in node.children]


class AttemptBudgetTests(unittest.TestCase):
    def test_budget_grows_quadratically(self) -> None:
        self.assertEqual(attempt_budget(0), 0)
        self.assertEqual(attempt_budget(1), 1)
        self.assertEqual(attempt_budget(4), 10)
        self.assertEqual(attempt_budget(100), 5050)


class BuildLinkTreeTests(unittest.TestCase):
    def test_empty_input_gives_bare_root(self) -> None:
        tree, report = build_link_tree([])

        self.assertEqual(tree.root.name, ROOT_NAME)
        self.assertEqual(tree.root.children, [])
        self.assertEqual(tree.node_count, 0)
        self.assertEqual(report.attempts, 0)
        self.assertEqual(report.dropped, [])
        self.assertTrue(report.ok)

    def test_root_level_children_keep_input_order(self) -> None:
        records = [
            _rec("A"),
            _rec("B", "A"),
            _rec("C"),
            _rec("D", "C"),
            _rec("E"),
        ]
        tree, _ = build_link_tree(records)

        self.assertEqual(_child_names(tree.root), ["A", "C", "E"])
        self.assertEqual(_child_names(tree.root.children[0]), ["B"])
        self.assertEqual(_child_names(tree.root.children[1]), ["D"])

    def test_every_resolvable_record_appears_once_under_its_parent(self) -> None:
        records = [
            _rec("Leaf", "Mid"),
            _rec("Mid", "Top"),
            _rec("Other", "Top"),
            _rec("Top"),
        ]
        tree, report = build_link_tree(records)

        self.assertEqual(sorted(tree.names()), ["Leaf", "Mid", "Other", "Top"])
        self.assertEqual(tree.find("Leaf").parent_name, "Mid")
        self.assertIn(tree.find("Leaf"), tree.find("Mid").children)
        self.assertEqual(report.dropped, [])
        self.assertEqual(tree.node_count, 4)
        self.assertEqual(tree.leaf_count, 2)

    def test_reverse_chain_uses_the_whole_budget_and_resolves(self) -> None:
        records = [_rec("C3", "C2"), _rec("C2", "C1"), _rec("C1", "R"), _rec("R")]
        tree, report = build_link_tree(records, stop_when_stalled=False)

        self.assertEqual(report.attempt_budget, 6)
        self.assertEqual(report.attempts, 6)
        self.assertFalse(report.budget_exhausted)
        self.assertEqual(report.dropped, [])
        node = tree.root
        for expected in ["R", "C1", "C2", "C3"]:
            self.assertEqual(_child_names(node), [expected])
            node = node.children[0]

    def test_dangling_parent_is_dropped_and_reported(self) -> None:
        records = [_rec("A"), _rec("B", "MISSING")]
        with self.assertLogs("link_tree.builder", level="WARNING") as captured:
            tree, report = build_link_tree(records)

        self.assertEqual(_child_names(tree.root), ["A"])
        self.assertIsNone(tree.find("B"))
        self.assertEqual(report.dropped, ["B"])
        self.assertFalse(report.ok)
        self.assertTrue(any("B" in line for line in captured.output))

    def test_descendants_of_dangling_record_are_dropped_in_input_order(self) -> None:
        records = [_rec("C", "B"), _rec("A"), _rec("B", "MISSING")]
        tree, report = build_link_tree(records)

        self.assertEqual(tree.names(), ["A"])
        self.assertEqual(report.dropped, ["C", "B"])

    def test_cycle_terminates_and_drops_both(self) -> None:
        records = [_rec("A", "B"), _rec("B", "A")]
        tree, report = build_link_tree(records)

        self.assertEqual(tree.root.children, [])
        self.assertEqual(report.dropped, ["A", "B"])
        self.assertTrue(report.stalled)
        self.assertFalse(report.budget_exhausted)
        self.assertEqual(report.attempts, 2)

    def test_cycle_without_stall_shortcut_exhausts_budget(self) -> None:
        records = [_rec("A", "B"), _rec("B", "A")]
        tree, report = build_link_tree(records, stop_when_stalled=False)

        self.assertEqual(tree.root.children, [])
        self.assertEqual(report.dropped, ["A", "B"])
        self.assertTrue(report.budget_exhausted)
        self.assertFalse(report.stalled)
        self.assertEqual(report.attempts, report.attempt_budget)
        self.assertEqual(report.attempts, 3)

    def test_cycle_next_to_valid_records_leaves_rest_usable(self) -> None:
        records = [
            _rec("Home"),
            _rec("X", "Y"),
            _rec("Docs", "Home"),
            _rec("Y", "X"),
        ]
        tree, report = build_link_tree(records)

        self.assertEqual(tree.names(), ["Home", "Docs"])
        self.assertEqual(report.dropped, ["X", "Y"])

    def test_children_follow_resolution_order_by_default(self) -> None:
        records = [_rec("P"), _rec("A", "Y"), _rec("Y", "P"), _rec("B", "Y")]
        tree, _ = build_link_tree(records)

        self.assertEqual(_child_names(tree.find("Y")), ["B", "A"])

    def test_input_child_order_restores_record_order(self) -> None:
        records = [_rec("P"), _rec("A", "Y"), _rec("Y", "P"), _rec("B", "Y")]
        tree, _ = build_link_tree(records, child_order="input")

        self.assertEqual(_child_names(tree.find("Y")), ["A", "B"])
        self.assertEqual(_child_names(tree.root), ["P"])

    def test_unknown_child_order_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_link_tree([], child_order="alphabetical")

    def test_duplicate_names_warn_by_default(self) -> None:
        tree, report = build_link_tree([_rec("A"), _rec("A")])

        self.assertEqual(_child_names(tree.root), ["A", "A"])
        self.assertTrue(any("Duplicate" in warning for warning in report.warnings))

    def test_duplicate_names_raise_in_strict_mode(self) -> None:
        with self.assertRaises(DuplicateNameError) as ctx:
            build_link_tree([_rec("A"), _rec("B", "A"), _rec("B")], check_unique=True)

        self.assertEqual(ctx.exception.name, "B")

    def test_build_is_deterministic(self) -> None:
        records = [
            _rec("A", "Y"),
            _rec("P"),
            _rec("Y", "P"),
            _rec("B", "Y"),
            _rec("Q", "MISSING"),
        ]
        first_tree, first_report = build(records)
        second_tree, second_report = build(records)

        self.assertEqual(tree_to_dict(first_tree), tree_to_dict(second_tree))
        self.assertEqual(first_report.to_dict(), second_report.to_dict())

    def test_build_does_not_mutate_input(self) -> None:
        records = [_rec("B", "A"), _rec("A")]
        snapshot = list(records)
        build_link_tree(records)

        self.assertEqual(records, snapshot)

    def test_url_is_copied_to_node(self) -> None:
        tree, _ = build_link_tree([_rec("Work"), _rec("Email", "Work", "https://mail.example.com")])

        self.assertEqual(tree.find("Email").url, "https://mail.example.com")
        self.assertIsNone(tree.find("Work").url)


if __name__ == "__main__":
    unittest.main()
