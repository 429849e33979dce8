from dungeon_master.cli.repl import main

main()
