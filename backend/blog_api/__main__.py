from blog_api.main import run

run()
