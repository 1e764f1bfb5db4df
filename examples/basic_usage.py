#!/usr/bin/env python3
"""
Basic prmerge usage example.

Classifies a few hand-built pull request histories without touching the
network, then resolves the patch parent of a merge commit through the mock
hosting provider.
Run with: python examples/basic_usage.py
"""

from prmerge import InvalidInputError, MergeMode, PRMergeError
from prmerge.analyzer import PullRequestAnalyzer
from prmerge.merge_mode import classify_merge_mode
from prmerge.testing import MockHostingProvider, create_mock_commit, create_mock_pull_request

print("=== prmerge Basic Usage Example ===\n")

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    classify_merge_mode(None, [create_mock_commit()], pr_number=1)
except PRMergeError as e:
    print(f"   Caught PRMergeError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")
    assert isinstance(e, InvalidInputError)

print("\n   OK: Exception classes working\n")

# 2. Merge mode classification
print("2. Classifying merge commits...")

c1 = create_mock_commit(sha="c1", tree_sha="t1", parents=["base"])
c2 = create_mock_commit(sha="c2", tree_sha="t2", parents=["c1"])

cases = [
    ("two parents", create_mock_commit(sha="m1", tree_sha="t9", parents=["base", "c2"]), [c1, c2], MergeMode.MERGE),
    ("single commit", create_mock_commit(sha="m2", tree_sha="t1", parents=["base"]), [c1], MergeMode.SQUASH),
    ("same final tree", create_mock_commit(sha="m3", tree_sha="t2", parents=["base"]), [c1, c2], MergeMode.REBASE),
    ("new tree", create_mock_commit(sha="m4", tree_sha="t7", parents=["base"]), [c1, c2], MergeMode.SQUASH),
]

for label, merge_commit, pr_commits, expected in cases:
    mode = classify_merge_mode(merge_commit, pr_commits)
    print(f"   {label}: {mode.value}")
    assert mode is expected, f"{label} should be {expected.value}"

print("\n   OK: Classification working\n")

# 3. Patch tree resolution through a provider
print("3. Resolving the patch parent of a merge commit...")

provider = MockHostingProvider()
pr = create_mock_pull_request(number=7, merge_commit_sha="merge")
provider.add_commit(create_mock_commit(sha="base", tree_sha="t0"))
provider.add_commit(c2)
provider.add_commit(create_mock_commit(sha="merge", tree_sha="t9", parents=["base", "c2"]))
provider.configure_pr_commits(7, response=[c1, c2])

analyzer = PullRequestAnalyzer(provider)
print(f"   Merge mode: {analyzer.get_merge_mode(pr).value}")
parent = analyzer.find_patch_tree(pr)
print(f"   Diff against parent #{parent}")
assert parent == 1, "The branch side of the merge should be parent 1"
print(f"   Commits fetched: {provider.call_count('fetch_commit')}")

print("\n   OK: Patch tree resolution working\n")

print("=== All basic examples passed ===")
