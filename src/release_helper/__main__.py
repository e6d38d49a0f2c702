from release_helper.cli import app

app()
