from signbook.cli import main

#Worker processes started with the "spawn" method re-import this module; only the parent should run main().
if __name__ == "__main__":
    raise SystemExit( main() )
