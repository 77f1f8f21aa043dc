from typing import Optional
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from financeio.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'Você é um consultor financeiro pessoal. Gere relatórios claros, objetivos '
    'e com recomendações práticas.'
)


class DeepSeekClient:
    """Client per l'API di chat-completion usata dal motore remoto dei report"""

    def __init__(self, api_key: Optional[str], api_url: str, model: str = 'deepseek-chat', timeout: int = 60):
        if not api_key:
            raise ReportGenerationError('Chave da API de relatórios não configurada (DEEPSEEK_API_KEY)')
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.headers = {
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json',
        }
        self.session = self._create_session()

    @classmethod
    def from_config(cls, app_config):
        return cls(
            api_key=app_config.get('DEEPSEEK_API_KEY'),
            api_url=app_config.get('DEEPSEEK_API_URL'),
            model=app_config.get('DEEPSEEK_MODEL', 'deepseek-chat'),
            timeout=app_config.get('DEEPSEEK_TIMEOUT', 60),
        )

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def generate(self, prompt: str) -> str:
        payload = {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': prompt},
            ],
            'temperature': 0.7,
            'max_tokens': 2000,
        }
        try:
            response = self.session.post(self.api_url, headers=self.headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.exception('Erro na chamada da API de relatórios')
            raise ReportGenerationError(f'Falha ao gerar relatório: {e}') from e

        try:
            return body['choices'][0]['message']['content']
        except (KeyError, IndexError, TypeError) as e:
            logger.error('Resposta inesperada da API de relatórios: %s', body)
            raise ReportGenerationError('Resposta inválida da API de relatórios') from e
