from webmaster_mcp.cli.app import cli

cli(obj={})
