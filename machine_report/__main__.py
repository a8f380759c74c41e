from machine_report.main import app

app(prog_name="tr200")
