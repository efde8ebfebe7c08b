from oil_model_server.main import run

run()
