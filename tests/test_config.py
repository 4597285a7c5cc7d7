"""Testes do carregamento de configuracao."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from atividades.config import AppConfig, ConfigLoader, ConfigLoaderException, get_config, reset_config, set_config
from atividades.core.exceptions import InvalidConfigException


class TestConfigLoader(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.caminho = Path(self._tmp.name) / "config.yaml"
        self._env = patch.dict(os.environ, {}, clear=True)
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def _carregar(self) -> AppConfig:
        return ConfigLoader.load(self.caminho, use_dotenv=False)

    def test_defaults_sem_arquivo(self) -> None:
        config = self._carregar()

        self.assertEqual(config.environment, "prod")
        self.assertFalse(config.api.has_supabase)
        self.assertTrue(config.session.persist_session)
        self.assertEqual(config.activities.page_size, 100)
        self.assertEqual(config.server.port, 8000)

    def test_le_arquivo_yaml(self) -> None:
        self.caminho.write_text(
            "environment: dev\n"
            "api:\n"
            "  supabase_url: https://exemplo.supabase.co\n"
            "  supabase_key: anon\n"
            "activities:\n"
            "  page_size: 20\n",
            encoding="utf-8",
        )

        config = self._carregar()

        self.assertTrue(config.is_dev)
        self.assertTrue(config.api.has_supabase)
        self.assertFalse(config.api.has_service_key)
        self.assertEqual(config.activities.page_size, 20)

    def test_variaveis_de_ambiente_tem_precedencia(self) -> None:
        self.caminho.write_text("server:\n  port: 9000\n", encoding="utf-8")
        os.environ.update(
            {
                "SUPABASE_URL": "https://env.supabase.co",
                "SUPABASE_KEY": "chave",
                "ATIVIDADES_PORT": "9100",
                "ATIVIDADES_PERSIST_SESSION": "false",
                "LOG_LEVEL": "DEBUG",
            }
        )

        config = self._carregar()

        self.assertEqual(config.api.supabase_url, "https://env.supabase.co")
        self.assertEqual(config.server.port, 9100)
        self.assertFalse(config.session.persist_session)
        self.assertEqual(config.logging.nivel_minimo, "DEBUG")

    def test_valor_de_ambiente_invalido(self) -> None:
        os.environ["ATIVIDADES_PORT"] = "abc"
        with self.assertRaises(ConfigLoaderException):
            self._carregar()

    def test_ambiente_desconhecido(self) -> None:
        self.caminho.write_text("environment: marte\n", encoding="utf-8")
        with self.assertRaises(ConfigLoaderException):
            self._carregar()

    def test_tipo_errado_no_yaml(self) -> None:
        self.caminho.write_text("activities:\n  page_size: muitos\n", encoding="utf-8")
        with self.assertRaises(ConfigLoaderException):
            self._carregar()

    def test_yaml_que_nao_e_mapeamento(self) -> None:
        self.caminho.write_text("- item\n", encoding="utf-8")
        with self.assertRaises(ConfigLoaderException):
            self._carregar()


class TestModelos(unittest.TestCase):
    def test_page_size_precisa_ser_positivo(self) -> None:
        with self.assertRaises(InvalidConfigException):
            AppConfig.from_dict({"activities": {"page_size": 0}})


class TestSingleton(unittest.TestCase):
    def tearDown(self) -> None:
        reset_config()

    def test_set_config_substitui_instancia_global(self) -> None:
        config = AppConfig(environment="dev")
        set_config(config)
        self.assertIs(get_config(), config)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
