from forkshell.shell import main

main()
