from gimps.cli import app

app()
