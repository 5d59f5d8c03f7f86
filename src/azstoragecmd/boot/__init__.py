from .boot import init_azstoragecmd
