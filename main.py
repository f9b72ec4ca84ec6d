"""Entry point delegating to the GRASP glue pipeline CLI."""

from toptw_grasp.glue.pipeline import main as pipeline_main


def main() -> None:
    pipeline_main()


if __name__ == "__main__":
    main()
