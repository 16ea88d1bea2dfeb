from setuptools import setup

setup(
    name            = "signbook",
    version         = "1.0.0",
    description     = "Recover sign text and book contents from Minecraft Java Edition saves",
    packages        = [ "signbook" ],
    python_requires = ">=3.6",
    zip_safe        = True,
    entry_points    = {
        "console_scripts": [
            "signbook = signbook.cli:main"
        ]
    }
)
