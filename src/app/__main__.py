from src.app.main import run

run()
