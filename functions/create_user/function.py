import os
import uuid
import logging
from dataclasses import dataclass

import boto3  # type: ignore
import botocore  # type: ignore

TABLE_NAME = "tb_users"
DEFAULT_REGION = "sa-east-1"


def configure_logging():
    """Logger estandarizado, configurado una sola vez por proceso.

    Sin nombre de módulo ni timestamp: CloudWatch agrega la hora de ingesta.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(message)s")
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root


logger = configure_logging()


@dataclass(frozen=True)
class Request:
    user_name: str

    @classmethod
    def from_event(cls, event):
        # KeyError si falta user_name: lo reporta el runtime de Lambda
        return cls(user_name=event["user_name"])


@dataclass(frozen=True)
class Response:
    request_id: str
    message: str

    def to_dict(self):
        return {"req_id": self.request_id, "msg": self.message}


def resolve_region():
    region = os.environ.get("AWS_REGION") or boto3.session.Session().region_name
    return region or DEFAULT_REGION


def build_item(user_id, user_name):
    return {"user_id": {"S": user_id}, "user_name": {"S": user_name}}


def insert_user(user_name: str) -> bool:
    """Guarda un usuario nuevo en tb_users.

    Un solo intento: devuelve False ante cualquier error de DynamoDB, de
    configuración (región o perfil inválidos) o de conexión, sin reintentos.
    """
    user_id = str(uuid.uuid4())
    item = build_item(user_id, user_name)

    try:
        region_name = resolve_region()
        logger.info(f"[CreateUser] 🌍 Región: {region_name}")

        # Cliente nuevo en cada llamada
        dynamodb = boto3.client(
            "dynamodb",
            region_name=region_name,
            endpoint_url=os.environ.get("AWS_ENDPOINT_URL"),
        )

        logger.info(f"[CreateUser] 💾 Guardando en DynamoDB: {TABLE_NAME}")
        dynamodb.put_item(TableName=TABLE_NAME, Item=item)
    except botocore.exceptions.ClientError as ex:
        error_message = ex.response["Error"]["Message"]
        logger.error(f"[CreateUser] ❌ Error del cliente DynamoDB: {error_message}")
        return False
    except botocore.exceptions.BotoCoreError as ex:
        logger.error(f"[CreateUser] ❌ Error de configuración o conexión con DynamoDB: {str(ex)}")
        return False

    logger.info(f"[CreateUser] ✅ Usuario guardado con user_id: {user_id}")
    return True


def lambda_handler(event, context):
    request = Request.from_event(event)
    logger.info(f"[CreateUser] 🔑 Request ID: {context.aws_request_id}")
    logger.info(f"[CreateUser] 📥 Usuario recibido: {request.user_name}")

    is_success = insert_user(request.user_name)

    if is_success:
        message = f"Created user: {request.user_name}"
    else:
        message = f"Failed to create user: {request.user_name}"

    response = Response(request_id=context.aws_request_id, message=message)
    logger.info(f"[CreateUser] 📤 Respuesta: {response.message}")

    return response.to_dict()
