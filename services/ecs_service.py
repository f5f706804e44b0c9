"""
ECS service for launching Fargate tasks and reading their overrides.
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, TYPE_CHECKING

from config import AwsConfig, get_config, load_default_configuration
from logger_config import get_logger
from utils.decorators import wrap_remote_errors
from utils.exceptions import NoTasksFoundError, OverrideExtractionError

if TYPE_CHECKING:
    from mypy_boto3_ecs import ECSClient
else:
    ECSClient = Any

logger = get_logger(__name__)

# Maximum number of attempts for each ECS request
ECS_MAX_ATTEMPTS = 2


@dataclass(frozen=True)
class KeyValuePair:
    """Name/value pair injected into a container environment."""

    name: Optional[str]
    value: Optional[str]

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'name': self.name, 'value': self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KeyValuePair":
        return cls(name=data.get('name'), value=data.get('value'))


class EcsOverrideEnv(Protocol):
    """
    Anything convertible into container environment overrides.

    Example::

        @dataclass
        class BuilderConfig:
            scope_config_id: str
            debug: bool

            def create_ecs_override_env(self) -> List[KeyValuePair]:
                return [
                    KeyValuePair('SCOPE_BUILD_CONFIG_ID', self.scope_config_id),
                    KeyValuePair('DEBUG', str(self.debug).lower()),
                ]
    """

    def create_ecs_override_env(self) -> List[KeyValuePair]:
        ...


class EnvOverrides:
    """EcsOverrideEnv built from a plain mapping, keeping its order."""

    def __init__(self, values: Mapping[str, Any]):
        self.values = dict(values)

    def create_ecs_override_env(self) -> List[KeyValuePair]:
        pairs = []
        for name, value in self.values.items():
            if isinstance(value, bool):
                value = str(value).lower()
            pairs.append(KeyValuePair(name=name, value=str(value)))
        return pairs


@dataclass(frozen=True)
class EcsNetworkConfiguration:
    """
    Simplified network configuration for ECS launch tasks.

    Only the subnets are configurable; a public IP is always assigned.
    """

    subnets: List[str]

    @classmethod
    def from_env(cls, var_name: str = 'SUBNETS') -> "EcsNetworkConfiguration":
        """
        Build the configuration from a comma separated list of subnets.

        Raises:
            ValueError: If the environment variable is missing or empty
        """
        raw = os.environ.get(var_name, '')
        subnets = [subnet.strip() for subnet in raw.split(',') if subnet.strip()]
        if not subnets:
            raise ValueError(f"{var_name} environment variable is required")
        return cls(subnets=subnets)

    def to_request(self) -> Dict[str, Any]:
        """Render the networkConfiguration parameter of run_task."""
        return {
            'awsvpcConfiguration': {
                'subnets': list(self.subnets),
                'assignPublicIp': 'ENABLED'
            }
        }


def get_override_environment_from_tasks(
    tasks: List[Dict[str, Any]]
) -> Optional[List[KeyValuePair]]:
    """Return the first task's first container override environment, if any."""
    if not tasks:
        return None
    container_overrides = (tasks[0].get('overrides') or {}).get('containerOverrides')
    if not container_overrides:
        return None
    environment = container_overrides[0].get('environment')
    if environment is None:
        return None
    return [KeyValuePair.from_dict(pair) for pair in environment]


class EcsService:
    """Service for Elastic Container Service operations."""

    def __init__(self, config: Optional[AwsConfig] = None) -> None:
        """
        Initialize ECS service.

        Args:
            config: Shared AWS configuration (defaults to the global one)
        """
        self.config = config or get_config()
        self._client: Optional[ECSClient] = None

    @property
    def client(self) -> ECSClient:
        """Lazy initialization of ECS client."""
        if self._client is None:
            self._client = self.config.create_client('ecs', ECS_MAX_ATTEMPTS)
        return self._client

    @wrap_remote_errors(
        service='ecs',
        operation='RunTask',
        message='failed to start task',
        log_errors=True
    )
    def launch_task(
        self,
        task_definition: str,
        container_name: str,
        cluster: str,
        network_config: EcsNetworkConfiguration,
        override_config: EcsOverrideEnv
    ) -> None:
        """
        Launch one task of a task definition.

        Some settings are fixed: a single Fargate task, tags propagated
        from the task definition.

        Args:
            task_definition: Task definition family, family:revision or ARN
            container_name: Container receiving the environment overrides
            cluster: Cluster name or ARN
            network_config: Subnets to run the task in
            override_config: Source of the environment overrides

        Raises:
            RemoteCallError: If the task cannot be started
        """
        environment = [pair.to_dict() for pair in override_config.create_ecs_override_env()]

        response = self.client.run_task(
            cluster=cluster,
            count=1,
            launchType='FARGATE',
            networkConfiguration=network_config.to_request(),
            taskDefinition=task_definition,
            overrides={
                'containerOverrides': [
                    {'name': container_name, 'environment': environment}
                ]
            },
            propagateTags='TASK_DEFINITION'
        )

        failures = response.get('failures') or []
        if failures:
            logger.warning(
                f'run_task for {task_definition} on {cluster} reported failures',
                extra={'failures': failures}
            )
        else:
            logger.info(f'Started task {task_definition} on cluster {cluster}')

    @wrap_remote_errors(
        service='ecs',
        operation='DescribeTasks',
        message='failed to get tasks'
    )
    def get_task_override_environment(
        self,
        cluster: str,
        task_arn: str
    ) -> List[KeyValuePair]:
        """
        Retrieve the override environment of a task.

        Args:
            cluster: Cluster name or ARN
            task_arn: ARN of the task to describe

        Returns:
            Environment of the first container override of the task

        Raises:
            RemoteCallError: If the tasks can't be retrieved
            NoTasksFoundError: If the response holds no task
            OverrideExtractionError: If the task has no override environment
        """
        response = self.client.describe_tasks(cluster=cluster, tasks=[task_arn])

        tasks = response.get('tasks')
        if not tasks:
            raise NoTasksFoundError('no tasks found', resource=task_arn)

        environment = get_override_environment_from_tasks(tasks)
        if environment is None:
            raise OverrideExtractionError(
                'could not extract override environment from tasks',
                resource=task_arn
            )
        return environment


def create_default_ecs_service() -> EcsService:
    """Create an ECS service from the default environment configuration."""
    return EcsService(load_default_configuration())
