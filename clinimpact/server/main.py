"""clinimpact scenario server - MCP entry point.

Exposes the scenario parser, derived metrics and capacity planning as five
MCP tools over stdio.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from clinimpact.extraction.config import ProviderConfig, ProviderKey
from clinimpact.server.audit import AuditLog
from clinimpact.server.tools import ScenarioServerTools

logger = logging.getLogger("clinimpact")

_PARAMS_SCHEMA = {
    "type": "object",
    "description": "Simulation parameters (camelCase): totalPatients, positiveCases, truePositives, falsePositives, plus optional operational fields",
    "properties": {
        "totalPatients": {"type": "integer"},
        "positiveCases": {"type": "integer"},
        "truePositives": {"type": "integer"},
        "falsePositives": {"type": "integer"},
    },
    "required": ["totalPatients", "positiveCases", "truePositives", "falsePositives"],
}


def create_server(
    config: ProviderConfig | None = None,
    audit_path: str | None = None,
) -> tuple[Server, ScenarioServerTools]:
    """Create and configure the MCP server with 5 scenario tools."""

    server = Server("clinimpact-scenario-server")
    tools = ScenarioServerTools(config=config, audit_log=AuditLog(audit_path))

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="parse_scenario",
                description="Extract confusion-matrix counts and review-capacity figures from a free-text clinical scenario. Tries a deterministic local parser first and falls back to the configured language model only when the local result is too weak.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "text": {
                            "type": "string",
                            "description": "Scenario description",
                        },
                        "allow_remote": {
                            "type": "boolean",
                            "description": "Allow the remote extractor fallback",
                            "default": True,
                        },
                    },
                    "required": ["text"],
                },
            ),
            Tool(
                name="compute_metrics",
                description="Derive false negatives, true negatives, precision, recall, specificity and prevalence from simulation parameters.",
                inputSchema={
                    "type": "object",
                    "properties": {"params": _PARAMS_SCHEMA},
                    "required": ["params"],
                },
            ),
            Tool(
                name="plan_capacity",
                description="Scale flagged-case rates to a deployment cohort and compare them with staff review capacity and the service-level window.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "params": _PARAMS_SCHEMA,
                        "cohort_size": {"type": "integer"},
                        "daily_capacity": {"type": "integer"},
                        "workdays_per_week": {"type": "integer", "minimum": 1, "maximum": 7},
                        "sla_days": {"type": "integer"},
                        "horizon_days": {"type": "integer"},
                    },
                    "required": ["params"],
                },
            ),
            Tool(
                name="fit_to_capacity",
                description="Lower false positives (or true positives, when they alone exceed capacity) so the cohort's flagged cases can be reviewed within the service-level window. Needs cohortSize or totalPatients, dailyCapacity and slaDays in params.",
                inputSchema={
                    "type": "object",
                    "properties": {"params": _PARAMS_SCHEMA},
                    "required": ["params"],
                },
            ),
            Tool(
                name="list_presets",
                description="List the built-in clinical scenario presets, or return one preset with its scenario text and reference parameters.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "preset_id": {
                            "type": "string",
                            "description": "Preset id (omit to list all)",
                        },
                    },
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Dispatch tool calls to ScenarioServerTools."""
        try:
            if name == "parse_scenario":
                result = tools.parse_scenario(
                    text=arguments["text"],
                    allow_remote=arguments.get("allow_remote", True),
                )
            elif name == "compute_metrics":
                result = tools.compute_metrics(arguments["params"])
            elif name == "plan_capacity":
                result = tools.plan_capacity(
                    arguments["params"],
                    cohort_size=arguments.get("cohort_size"),
                    daily_capacity=arguments.get("daily_capacity"),
                    workdays_per_week=arguments.get("workdays_per_week"),
                    sla_days=arguments.get("sla_days"),
                    horizon_days=arguments.get("horizon_days"),
                )
            elif name == "fit_to_capacity":
                result = tools.fit_to_capacity(arguments["params"])
            elif name == "list_presets":
                result = tools.list_presets(arguments.get("preset_id"))
            else:
                result = {"error": f"Unknown tool: {name}"}

            return [TextContent(type="text", text=json.dumps(result, indent=2, default=str))]

        except Exception as e:
            logger.exception("Tool %s failed", name)
            return [TextContent(type="text", text=json.dumps({"error": str(e)}))]

    return server, tools


async def main():
    """Run the MCP server."""
    parser = argparse.ArgumentParser(description="clinimpact scenario server")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    parser.add_argument("--audit-path", type=str, help="Audit log (JSONL) path")
    parser.add_argument(
        "--local-only",
        action="store_true",
        help="Never call the remote extractor",
    )
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper()))

    config = ProviderConfig.from_env()
    if args.local_only:
        config = config.model_copy(update={"provider": ProviderKey.LOCAL})
    logger.info("Starting clinimpact scenario server (provider=%s)", config.provider.value)

    server, tools = create_server(config=config, audit_path=args.audit_path)

    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run():
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
