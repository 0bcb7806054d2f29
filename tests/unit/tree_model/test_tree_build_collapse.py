"""Path-tree construction and single-child chain collapsing."""

from __future__ import annotations

import unittest

from diffnav.diff_source import STATUS_MODIFIED, FileChange
from diffnav.tree_model import (
    DirectoryNode,
    LeafNode,
    build_collapsed_tree,
    build_path_tree,
    collapse_tree,
    find_directory,
    iter_leaves,
)


def change(path: str) -> FileChange:
    return FileChange(old_path=path, new_path=path, status=STATUS_MODIFIED)


def shape(node) -> object:
    """Nested (name, children) tuples; leaves become their names."""
    if isinstance(node, LeafNode):
        return node.name
    return (node.name, [shape(child) for child in node.children])


class BuildPathTreeTests(unittest.TestCase):
    def test_root_is_dot_with_empty_full_path(self) -> None:
        root = build_path_tree([change("a.txt")])
        self.assertEqual(root.name, ".")
        self.assertEqual(root.full_path, "")
        self.assertTrue(root.is_root)

    def test_directories_are_shared_between_files(self) -> None:
        root = build_path_tree([change("src/a.py"), change("src/lib/b.py"), change("src/c.py")])
        self.assertEqual(shape(root), (".", [("src", ["a.py", ("lib", ["b.py"]), "c.py"])]))

    def test_full_paths_are_slash_joined(self) -> None:
        root = build_path_tree([change("src/lib/b.py")])
        lib = find_directory(root, "src/lib")
        self.assertIsNotNone(lib)
        self.assertEqual(lib.name, "lib")

    def test_leaves_keep_file_order(self) -> None:
        files = [change("x/1"), change("y/2"), change("x/3")]
        root = build_path_tree(files)
        self.assertEqual([leaf.path for leaf in iter_leaves(root)], ["x/1", "x/3", "y/2"])


class CollapseTreeTests(unittest.TestCase):
    def test_single_child_chain_collapses_below_root(self) -> None:
        root = build_collapsed_tree([change("pkg/x/y/z.go")])
        self.assertEqual(shape(root), (".", [("pkg/x/y", ["z.go"])]))
        (collapsed,) = root.children
        self.assertEqual(collapsed.full_path, "pkg/x/y")

    def test_branching_directory_stops_the_chain(self) -> None:
        root = build_collapsed_tree([change("a/b/c/one.txt"), change("a/b/d/two.txt")])
        self.assertEqual(shape(root), (".", [("a/b", [("c", ["one.txt"]), ("d", ["two.txt"])])]))

    def test_root_is_never_merged(self) -> None:
        root = build_collapsed_tree([change("only/dir/file.txt")])
        self.assertEqual(root.name, ".")
        self.assertEqual(len(root.children), 1)

    def test_directory_with_file_and_subdirectory_is_kept(self) -> None:
        root = build_collapsed_tree([change("a/f.txt"), change("a/b/g.txt")])
        self.assertEqual(shape(root), (".", [("a", ["f.txt", ("b", ["g.txt"])])]))

    def test_shared_directory_chain_with_root_file(self) -> None:
        root = build_collapsed_tree([change(path) for path in ("a/b/c.go", "a/b/d.go", "yarn.lock")])
        self.assertEqual(shape(root), (".", [("a/b", ["c.go", "d.go"]), "yarn.lock"]))
        self.assertEqual(root.children[0].full_path, "a/b")

    def test_every_file_becomes_exactly_one_leaf(self) -> None:
        paths = [
            "a/b/c.go",
            "a/b/d.go",
            "yarn.lock",
            "pkg/x/y/z.go",
            "docs/guide.md",
            "docs/api/ref.md",
            "README.md",
        ]
        for tree in (build_path_tree([change(p) for p in paths]), build_collapsed_tree([change(p) for p in paths])):
            leaves = [leaf.path for leaf in iter_leaves(tree)]
            self.assertEqual(len(leaves), len(paths))
            self.assertEqual(sorted(leaves), sorted(paths))

    def test_collapse_is_idempotent_and_pure(self) -> None:
        tree = build_path_tree([change("pkg/x/y/z.go"), change("pkg/x/w.go")])
        before = shape(tree)
        once = collapse_tree(tree)
        twice = collapse_tree(once)
        self.assertEqual(shape(once), shape(twice))
        self.assertEqual(shape(tree), before)
        self.assertIsInstance(once, DirectoryNode)


if __name__ == "__main__":
    unittest.main()
