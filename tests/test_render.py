"""Tests for configuration rendering."""
import json
import re

import pytest

from buildconf import compose
from buildconf.core.errors import UnknownFormatError
from buildconf.core.filters import Call, js_regex, js_value, to_plain
from buildconf.core.render import plugin_requires, render, render_js, render_json, rule_to_dict, to_dict


def test_js_regex_literals():
    assert js_regex(re.compile(r'\.css$', re.IGNORECASE)) == r'/\.css$/i'
    assert js_regex(re.compile(r'\.tsx?$')) == r'/\.tsx?$/'
    assert js_regex(re.compile(r'a/b')) == r'/a\/b/'
    assert js_regex(re.compile(r'[\/\\]x')) == r'/[\/\\]x/'


def test_js_value_scalars():
    assert js_value(None) == 'undefined'
    assert js_value(True) == 'true'
    assert js_value(8192) == '8192'
    assert js_value('dist/') == '"dist/"'
    assert js_value({'Promise': 'bluebird'}) == '{ Promise: "bluebird" }'
    assert js_value({'aurelia-testing': []}) == '{ "aurelia-testing": [] }'
    assert js_value(Call('AureliaPlugin', new=True)) == 'new AureliaPlugin()'


def test_js_value_rejects_unknown_types():
    with pytest.raises(TypeError):
        js_value(object())


def test_to_plain_converts_calls_and_patterns():
    value = {'test': re.compile(r'\.html$', re.IGNORECASE), 'use': Call('f', ({'a': 1},))}
    assert to_plain(value) == {'test': r'/\.html$/i', 'use': {'call': 'f', 'args': [{'a': 1}]}}


def test_to_dict_shape():
    tree = to_dict(compose({'production': True}))
    assert tree['mode'] == 'production'
    assert tree['devtool'] == 'nosources-source-map'
    assert tree['target'] == 'electron-renderer'
    assert tree['entry'] == {'app': ['aurelia-bootstrapper'], 'vendor': ['bluebird']}
    assert tree['output']['publicPath'] == 'dist/'
    assert tree['performance'] == {'hints': False}
    assert tree['devServer']['historyApiFallback'] is True
    assert len(tree['module']['rules']) == 10
    assert [p.callee for p in tree['plugins']][:2] == ['AureliaPlugin', 'ProvidePlugin']


def test_rule_to_dict_variants():
    inline = compose({}).transform_rules
    extracted = compose({'extractCss': True}).transform_rules
    assert rule_to_dict(inline[0])['use'] == ['style-loader', 'css-loader']

    call = rule_to_dict(extracted[1])['use']
    assert call.callee == 'ExtractTextPlugin.extract'
    assert call.args[0] == {
        'fallback': 'style-loader',
        'use': [{'loader': 'css-loader', 'options': {'minimize': True}}, 'sass-loader'],
    }

    images = rule_to_dict(inline[6])
    assert images['loader'] == 'url-loader'
    assert images['options'] == {'limit': 8192}


def test_coverage_rule_to_dict(layout):
    entry = rule_to_dict(compose({'coverage': True}, layout).transform_rules[-1])
    assert entry['loader'] == 'istanbul-instrumenter-loader'
    assert entry['include'] == [layout.src_dir]
    assert entry['enforce'] == 'post'
    assert entry['options'] == {'esModules': True}
    assert entry['exclude'].pattern == r'\.(spec|test)\.[jt]s$'


def test_render_json_is_valid_json():
    data = json.loads(render_json(compose({'coverage': True, 'analyze': True})))
    assert data['mode'] == 'development'
    assert data['module']['rules'][0]['test'] == r'/\.css$/i'
    assert data['module']['rules'][-1]['exclude'] == r'/\.(spec|test)\.[jt]s$/i'
    assert data['plugins'][-1] == {'new': 'BundleAnalyzerPlugin', 'args': []}


def test_plugin_requires_groups_named_exports():
    requires = plugin_requires(compose({'extractCss': True, 'analyze': True}))
    by_module = {r['module']: r for r in requires}
    assert by_module['aurelia-webpack-plugin']['names'] == ['AureliaPlugin', 'ModuleDependenciesPlugin']
    assert by_module['webpack']['names'] == ['ProvidePlugin']
    assert by_module['html-webpack-plugin']['default'] == 'HtmlWebpackPlugin'
    assert by_module['extract-text-webpack-plugin']['default'] == 'ExtractTextPlugin'
    assert by_module['webpack-bundle-analyzer']['names'] == ['BundleAnalyzerPlugin']


def test_render_js_module():
    text = render_js(compose({'production': True, 'extractCss': True, 'server': 'local'}))
    assert "const { AureliaPlugin, ModuleDependenciesPlugin } = require(\"aurelia-webpack-plugin\");" in text
    assert 'const ExtractTextPlugin = require("extract-text-webpack-plugin");' in text
    assert 'module.exports = {' in text
    assert 'ExtractTextPlugin.extract(' in text
    assert 'new HtmlWebpackPlugin(' in text
    assert '"[name].[chunkhash].bundle.js"' in text
    assert r'/\.css$/i' in text
    assert 'BundleAnalyzerPlugin' not in text
    assert text.rstrip().endswith('};')


def test_render_js_without_extraction_has_no_extract_call():
    text = render_js(compose({}))
    assert 'ExtractTextPlugin' not in text
    assert '"style-loader"' in text


def test_render_dispatch():
    config = compose({})
    assert render(config, 'json') == render_json(config)
    assert render(config, 'js') == render_js(config)
    with pytest.raises(UnknownFormatError):
        render(config, 'yaml')
