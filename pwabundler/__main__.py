from pwabundler.cli import app

app(prog_name="pwabundler")
