from benfordlab.cli.main import app

app(prog_name="benfordlab")
