from controllers.cli_controller import CLIController
from game.engine import RoundEngine


def main():
    engine = RoundEngine(hold_reveal=True)
    cli = CLIController(engine)
    cli.run()


if __name__ == "__main__":
    main()
