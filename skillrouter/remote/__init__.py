from skillrouter.remote.guidelines import GuidelineDocument, GuidelineFetcher

__all__ = ["GuidelineDocument", "GuidelineFetcher"]
