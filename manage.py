"""
This is the main file to run the game.
It imports the run function from the meteor_defense app and runs it.
"""

from meteor_defense.app import run

if __name__ == "__main__":
    run()
