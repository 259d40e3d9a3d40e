from reviewers_by_blame.event_processors.pull_request.processor import PullRequestProcessor

__all__ = ["PullRequestProcessor"]
