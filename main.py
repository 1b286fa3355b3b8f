from choir_registry.main import create_app

app = create_app()
