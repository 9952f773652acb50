from email_drafts.api import Application, create_app
from email_drafts.settings import Settings

application: Application = create_app(Settings(TEST_BACKEND="True", LOAD_TEST_DATA=True))
app = application.app
