from font_scout.cli import cli

cli(prog_name="font_scout")
