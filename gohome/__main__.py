from gohome.launcher import main

main()
