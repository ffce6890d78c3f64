import pathlib
from typing import Dict, List, Optional, Union

from constants.constants import (
    ARBIFIED_LIST_FILE_PREFIX,
    ETHERSCAN_LIST_NAME,
    NOVA_CHAIN_ID,
    PERMIT_TOKENS_FILE_NAME,
)
from ingestion.arbitrum.enums.permit_type import PermitType
from ingestion.arbitrum.models.token import ArbTokenList, EtherscanEntry
from ingestion.arbitrum.service.schema_validation_service import is_arb_token_list, validate_token_list
from utils.file_utils import read_json, write_json
from utils.logger_utils import get_logger

logger = get_logger("Token List Store")

PathLike = Union[str, pathlib.Path]


def list_name_to_file_name(name: str) -> str:
    file_name = "_".join(name.split(" ")).lower() + ".json"
    if not file_name.startswith(ARBIFIED_LIST_FILE_PREFIX):
        file_name = ARBIFIED_LIST_FILE_PREFIX + file_name
    return file_name


class TokenListStore(object):
    """
    Reads and writes the JSON artifacts of a run. A previous list read back is
    the only state carried between runs.
    """

    def __init__(self, token_list_dir: PathLike, full_list_dir: PathLike, l2_network_id: int):
        self.token_list_dir = pathlib.Path(token_list_dir)
        self.full_list_dir = pathlib.Path(full_list_dir)
        self.l2_network_id = l2_network_id

    def get_path(self, list_name: str) -> pathlib.Path:
        file_name = list_name_to_file_name(list_name)
        if self.l2_network_id == NOVA_CHAIN_ID:
            file_name = f"{NOVA_CHAIN_ID}_{file_name}"
        return self.token_list_dir / file_name

    def get_prev_list(self, path: PathLike) -> Optional[ArbTokenList]:
        """
        None when there is no previous list.

        Raises:
            SchemaValidationError: the file exists but is not a valid arbified list.
        """
        path = pathlib.Path(path)
        if not path.exists():
            logger.info(f"No previous version of the list at {path}")
            return None
        logger.info(f"Prev version of Arb List found at {path}")
        return is_arb_token_list(read_json(path))

    def write_list(self, token_list: ArbTokenList, path: PathLike) -> pathlib.Path:
        data = token_list.to_dict()
        # Validate again, nothing invalid ever reaches disk
        validate_token_list(data)
        write_json(path, data)
        logger.info(f"Token list generated at {path}")
        return pathlib.Path(path)

    def write_etherscan_list(self, entries: List[EtherscanEntry]) -> pathlib.Path:
        path = self.full_list_dir / f"{ETHERSCAN_LIST_NAME}.json"
        write_json(path, [entry.to_dict() for entry in entries])
        logger.info(f"List generated at {path}")
        return path

    def write_permit_tokens(self, permit_tokens: Dict[str, PermitType]) -> pathlib.Path:
        path = self.token_list_dir / PERMIT_TOKENS_FILE_NAME
        write_json(path, {address: permit_type.value for address, permit_type in permit_tokens.items()})
        logger.info(f"Token list generated at {path}")
        return path
