"""Skill router error hierarchy."""


class SkillRouterError(Exception):
    """Base error for skill loading, routing and guideline fetching."""


class SkillParseError(SkillRouterError):
    """A skill document could not be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse skill {path}: {reason}")


class UnknownSkillError(SkillRouterError):
    """Requested skill name is not loaded."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown skill: {name}")


class ProjectNotFoundError(SkillRouterError):
    """Project root does not exist or is not a directory."""

    def __init__(self, root: str) -> None:
        self.root = root
        super().__init__(f"Project directory not found: {root}")


class GuidelineFetchError(SkillRouterError):
    """Live guideline text could not be fetched."""

    def __init__(self, url: str, reason: str = "", attempts: int = 0) -> None:
        self.url = url
        self.reason = reason
        self.attempts = attempts
        msg = f"Failed to fetch guidelines from {url}"
        if reason:
            msg += f": {reason}"
        if attempts:
            msg += f" ({attempts} attempts)"
        super().__init__(msg)


class InvalidProjectTypeError(SkillRouterError, ValueError):
    """A project type name is not recognised."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unknown project type: {value}")
