from feedback_service.server import run

run()
