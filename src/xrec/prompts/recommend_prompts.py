"""MCP Prompts: pre-built interaction templates for finding extensions."""

from __future__ import annotations

from fastmcp import FastMCP


def register_recommend_prompts(mcp: FastMCP) -> None:
    """Register recommendation MCP prompts."""

    @mcp.prompt()
    def recommend_for_project_prompt(goal: str = "improve my development workflow") -> str:
        """Prompt template for recommending extensions for the current project."""
        return f"""I'd like extension recommendations for this project. My goal: {goal}.

1. Look at the project's languages, frameworks, dependencies and key files
2. Call recommend_extensions with that profile and my goal as the description
3. Explain the top picks and why they match
4. Point out which ones are official and how to install them

Keep the list short and focused on what will actually help."""

    @mcp.prompt()
    def find_extension_prompt(topic: str) -> str:
        """Prompt template for searching the catalog by topic."""
        return f"""Find extensions related to "{topic}".

Use search_extensions, then get_extension_details for the most promising
results, and summarise what each one does and how to install it."""
