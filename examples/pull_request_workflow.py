#!/usr/bin/env python3
"""
prmerge - Pull Request Workflow Example

Looks up a merged pull request on GitHub and reports:
1. How it was merged (merge commit, squash or rebase)
2. For merge commits, which parent a cherry-pick should diff against

Usage:
    GITHUB_TOKEN=ghp_... python examples/pull_request_workflow.py octocat/Hello-World 42
"""

import logging
import sys

from prmerge import (
    GitHubClient,
    GitHubProvider,
    MergeMode,
    PRMergeError,
    PullRequestAnalyzer,
    configure_logging,
)


def main() -> int:
    """Run the pull request workflow example."""
    if len(sys.argv) != 3 or "/" not in sys.argv[1]:
        print(f"usage: {sys.argv[0]} OWNER/REPO PR_NUMBER")
        return 2

    owner, name = sys.argv[1].split("/", 1)
    number = int(sys.argv[2])

    configure_logging(level=logging.INFO)

    print("=== prmerge Pull Request Example ===\n")

    try:
        with GitHubClient.from_env() as client:
            analyzer = PullRequestAnalyzer(GitHubProvider(client))

            # Step 1: Load the pull request
            print(f"1. Loading {owner}/{name}#{number}...")
            pr = analyzer.get_pull_request(owner, name, number)
            print(f"   Title: {pr.title}")
            if not pr.is_merged:
                print("   Pull request is not merged, nothing to analyze")
                return 1

            # Step 2: Fetch its commits once and reuse them
            commits = analyzer.get_commits(pr)
            print(f"   Commits: {len(commits)}")

            # Step 3: Classify the merge
            print("\n2. Detecting merge mode...")
            mode = analyzer.get_merge_mode(pr, commits)
            print(f"   Merged via: {mode.value}")

            # Step 4: Patch parent for merge commits
            if mode is MergeMode.MERGE:
                print("\n3. Finding the patch tree...")
                parent = analyzer.find_patch_tree(pr, commits)
                print(f"   Cherry-pick with: git cherry-pick -m {parent + 1} {pr.merge_commit_sha}")
            else:
                print(f"\n3. Cherry-pick the {len(commits)} PR commit(s) directly")
    except PRMergeError as e:
        print(f"   Error: {e}")
        return 1

    print("\n=== Example completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
