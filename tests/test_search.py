"""Tests for search filtering."""

from treemarks.models.node import BookmarkFields
from treemarks.operations.search import SearchFilter


class TestEmptyQuery:
    def test_everything_visible(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("")
        assert result.visible_ids == set(ids.values())
        assert result.force_expanded_ids == set()

    def test_empty_tree(self, tree):
        result = SearchFilter(tree).apply("anything")
        assert result.nodes == {}


class TestMatching:
    def test_leaf_match_reveals_ancestors(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("python")
        assert result.matching_ids == {ids["python"]}
        assert result.visible_ids == {ids["python"], ids["docs"], ids["dev"]}
        assert not result.is_visible(ids["github"])
        assert not result.is_visible(ids["news"])

    def test_force_expanded_ancestors(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("python")
        assert result.force_expanded_ids == {ids["docs"], ids["dev"]}
        assert result[ids["python"]].force_expanded is False

    def test_case_insensitive(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("GITHUB")
        assert result.matching_ids == {ids["github"]}

    def test_matches_description(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("hosting")
        assert result.matching_ids == {ids["github"]}
        assert result.visible_ids == {ids["github"], ids["dev"]}

    def test_url_is_not_searched(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("news.example")
        assert result.matching_ids == set()
        assert result.visible_ids == set()

    def test_matching_folder_without_matching_children(self, sample_tree):
        tree, ids = sample_tree
        result = SearchFilter(tree).apply("programming")
        assert result.matching_ids == {ids["dev"]}
        assert result.visible_ids == {ids["dev"]}
        assert result.force_expanded_ids == set()

    def test_query_is_remembered(self, sample_tree):
        tree, _ = sample_tree
        search = SearchFilter(tree)
        search.apply("dev")
        assert search.query == "dev"
        search.clear()
        assert search.query == ""

    def test_apply_does_not_touch_tree(self, sample_tree):
        tree, ids = sample_tree
        tree.set_collapsed(ids["dev"], True)
        SearchFilter(tree).apply("python")
        assert tree.get(ids["dev"]).collapsed is True

    def test_deep_tree(self, tree):
        parent = None
        for _ in range(3000):
            parent = tree.insert(BookmarkFields(title="level"), parent)
        tree.update(parent, BookmarkFields(title="needle"))
        result = SearchFilter(tree).apply("needle")
        assert len(result.visible_ids) == 3000
        assert result.matching_ids == {parent}


class TestReveal:
    def test_reveal_expands_collapsed_ancestors(self, sample_tree):
        tree, ids = sample_tree
        tree.set_collapsed(ids["dev"], True)
        tree.set_collapsed(ids["docs"], True)
        search = SearchFilter(tree)
        opened = search.reveal(search.apply("python"))
        assert set(opened) == {ids["dev"], ids["docs"]}
        assert tree.get(ids["dev"]).collapsed is False

    def test_expansion_is_sticky(self, sample_tree):
        tree, ids = sample_tree
        tree.set_collapsed(ids["docs"], True)
        search = SearchFilter(tree)
        search.reveal(search.apply("python"))
        search.reveal(search.clear())
        assert tree.get(ids["docs"]).collapsed is False

    def test_reveal_leaves_unrelated_folders(self, sample_tree):
        tree, ids = sample_tree
        tree.set_collapsed(ids["docs"], True)
        search = SearchFilter(tree)
        search.reveal(search.apply("github"))
        assert tree.get(ids["docs"]).collapsed is True
