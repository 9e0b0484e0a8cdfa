"""Pull request comment reporter"""

from diffsift.config import ActionConfig


class CommentReporter:
    """Builds the markdown bodies posted back to the pull request"""

    @staticmethod
    def preview(diff: str, limit: int = ActionConfig.COMMENT_PREVIEW_LIMIT) -> str:
        """
        Cap a diff at ``limit`` characters

        Args:
            diff: Filtered diff text
            limit: Maximum number of diff characters to keep

        Returns:
            The diff unchanged when short enough, otherwise its first
            ``limit`` characters followed by a truncation notice
        """
        if len(diff) <= limit:
            return diff
        return diff[:limit] + ActionConfig.TRUNCATION_NOTICE

    @staticmethod
    def test_run(diff: str) -> str:
        """Comment for runs where the generation call was skipped"""
        lines = [
            "### Generated Diff",
            "",
            "#### Filtered Diff Sent to Model:",
            "```diff",
            CommentReporter.preview(diff),
            "```",
            "",
            "---",
            "*Note: This is a test run. The actual API call was skipped.*",
        ]
        return "\n".join(lines)

    @staticmethod
    def generated_test(code: str) -> str:
        return "\n".join(
            [
                "### Generated Playwright Test",
                "",
                "```javascript",
                code,
                "```",
            ]
        )
