"""Open Fixture Library channel model"""

OFL_URL = "https://open-fixture-library.org"
