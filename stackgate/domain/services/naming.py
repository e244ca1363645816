"""
Serverless Naming Conventions

Pure functions mirroring how the template compiler names stacks and
resources. The reconciler compares against these, so they must stay in step
with the compiler.
"""


def normalize_name(name: str) -> str:
    return name[:1].upper() + name[1:]


def normalize_function_name(function_name: str) -> str:
    return normalize_name(
        function_name.replace("-", "Dash").replace("_", "Underscore")
    )


class ServerlessNaming:
    def stack_name(self, service: str, stage: str) -> str:
        return f"{service}-{stage}"

    def cloudwatch_log_logical_id(self, function_name: str, serial: int) -> str:
        return (
            f"{normalize_function_name(function_name)}"
            f"LogsSubscriptionFilterCloudWatchLog{serial}"
        )
