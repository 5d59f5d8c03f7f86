from .commands import main


def run():
    from azstoragecmd.boot import init_azstoragecmd
    init_azstoragecmd("cli")
    main()
