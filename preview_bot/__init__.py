"""Pull request preview deployment bot.

On pull request open/update the bot builds the source repository's
documentation and publishes the HTML output to ``{repo}/{pr}`` inside a
separate preview repository; on close/merge it removes that path.

Example usage:
    from preview_bot.config import load_config
    from preview_bot.models import parse_event
    from preview_bot.runner import SubprocessCommandRunner
    from preview_bot.workers.preview import PreviewOrchestrator

    config = load_config("config.json")
    orchestrator = PreviewOrchestrator(config, SubprocessCommandRunner(), token)
    result = orchestrator.handle(parse_event(payload))
"""

__version__ = "0.1.0"
