from beyond_house import create_app

app = create_app()
