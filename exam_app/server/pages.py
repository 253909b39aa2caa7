"""HTML pages served to browsers: login gate, exam page and admin console.

Each page is self-contained. The exam page keeps all attempt state in one
session object created at page load; the guard script is a best-effort
deterrent against copying and opening developer tools, nothing more.
"""

from __future__ import annotations

_BASE_STYLE = """
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; user-select: none; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none !important; }
      .primary-btn, .secondary-btn { border: none; border-radius: 0.75rem; padding: 0.7rem 1.3rem; font-size: 1rem; cursor: pointer; color: #fff; }
      .primary-btn { background: #1f9aa5; }
      .primary-btn:hover { background: #16808a; }
      .secondary-btn { background: #334155; }
      .secondary-btn:hover { background: #475569; }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      input, select, textarea { border-radius: 0.5rem; border: 1px solid #334155; background: #0b1120; color: #f5f7ff; padding: 0.5rem; font-size: 1rem; }
      label { display: block; margin: 0.5rem 0 0.25rem; }
      .error { color: #f87171; min-height: 1.2rem; }
      table { width: 100%; border-collapse: collapse; }
      th, td { text-align: left; padding: 0.4rem; border-bottom: 1px solid #1e293b; }
"""

_GUARD_SCRIPT = """
      (function setupGuards() {
        ['copy', 'cut', 'paste', 'contextmenu'].forEach((evt) => {
          document.addEventListener(evt, (e) => e.preventDefault());
        });
        document.addEventListener('keydown', (e) => {
          if (e.key === 'F12') {
            e.preventDefault();
          }
          if (e.ctrlKey || e.metaKey) {
            const key = e.key.toLowerCase();
            if (['c', 'v', 'x', 'u', 's', 'p'].includes(key) || (e.shiftKey && key === 'i')) {
              e.preventDefault();
            }
          }
        });
      })();
"""

LOGIN_PAGE_HTML = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>SecureExam</title>
    <meta name="robots" content="noindex, nofollow" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>{_BASE_STYLE}</style>
  </head>
  <body>
    <section class="card">
      <h1>Online Exam</h1>
      <p>Enter your details to start. Keep this window focused during the whole exam.</p>
      <form id="loginForm" novalidate>
        <label for="name">Full name</label>
        <input id="name" autocomplete="name" />
        <label for="email">Email</label>
        <input id="email" type="email" autocomplete="email" />
        <p id="formError" class="error"></p>
        <button class="primary-btn" type="submit">Start Exam</button>
      </form>
    </section>
    <script>
{_GUARD_SCRIPT}
      const emailPattern = /^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$/;
      const formError = document.getElementById('formError');

      document.getElementById('loginForm').addEventListener('submit', (e) => {{
        e.preventDefault();
        const name = document.getElementById('name').value.trim();
        const email = document.getElementById('email').value.trim();
        if (!name) {{
          formError.textContent = 'Name is required.';
          return;
        }}
        if (!email) {{
          formError.textContent = 'Email is required.';
          return;
        }}
        if (!emailPattern.test(email.toLowerCase())) {{
          formError.textContent = 'Please enter a valid email address.';
          return;
        }}
        sessionStorage.setItem('examUserName', name);
        sessionStorage.setItem('examUserEmail', email);
        window.location.href = '/exam.html';
      }});
    </script>
  </body>
</html>
"""

EXAM_PAGE_HTML = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>SecureExam - Exam</title>
    <meta name="robots" content="noindex, nofollow" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>{_BASE_STYLE}
      header {{ display: flex; justify-content: space-between; flex-wrap: wrap; gap: 1rem; }}
      #timer {{ color: #facc15; font-weight: bold; }}
      #warnings {{ color: #f87171; }}
      .option-item {{ display: flex; gap: 0.5rem; align-items: center; padding: 0.6rem; margin: 0.4rem 0; background: #1e293b; border-radius: 0.5rem; cursor: pointer; }}
      #webcamVideo {{ width: 200px; border-radius: 0.5rem; background: #000; }}
      .nav {{ display: flex; gap: 0.75rem; margin-top: 1rem; }}
      #resultText {{ white-space: pre-line; }}
    </style>
  </head>
  <body>
    <header class="card">
      <span id="userInfo"></span>
      <span id="timer"></span>
      <span id="warnings"></span>
    </header>
    <section id="deviceBlocker" class="card hidden">
      <h2>Unsupported device</h2>
      <p>This exam must be taken on a laptop or desktop with a large enough window.</p>
    </section>
    <section class="card">
      <video id="webcamVideo" autoplay muted playsinline></video>
      <p id="webcamStatus"></p>
    </section>
    <section id="examSection" class="card hidden">
      <p id="questionProgress"></p>
      <h2 id="questionText"></h2>
      <div id="options"></div>
      <div class="nav">
        <button id="prevBtn" class="secondary-btn">Previous</button>
        <button id="nextBtn" class="secondary-btn">Next</button>
        <button id="submitBtn" class="primary-btn">Submit Test</button>
      </div>
    </section>
    <section id="resultSection" class="card hidden">
      <h2>Exam finished</h2>
      <p id="resultText"></p>
    </section>
    <script>
{_GUARD_SCRIPT}
      const LETTERS = ['A', 'B', 'C', 'D'];
      const el = (id) => document.getElementById(id);

      function formatTime(sec) {{
        const m = Math.floor(sec / 60).toString().padStart(2, '0');
        const s = (sec % 60).toString().padStart(2, '0');
        return `${{m}}:${{s}}`;
      }}

      function isDeviceSupported() {{
        const mobile = /Mobi|Android|iPhone|iPad|iPod/i.test(navigator.userAgent);
        const tooSmall = window.innerWidth < 700 || window.innerHeight < 500;
        return !(mobile || tooSmall);
      }}

      function createSession(userName, userEmail, config) {{
        return {{
          userName,
          userEmail,
          config,
          state: 'DEVICE_CHECK',
          questions: [],
          answers: [],
          currentIndex: 0,
          remainingSeconds: config.durationMinutes * 60,
          warningCount: 0,
          deviceWarningRaised: false,
          lastWarningTimestamp: null,
          warnings: [],
          timerHandle: null,
        }};
      }}

      function addWarning(session, reason) {{
        const now = Date.now();
        if (session.lastWarningTimestamp !== null && now - session.lastWarningTimestamp < session.config.warningDebounceMs) {{
          return false;
        }}
        session.lastWarningTimestamp = now;
        session.warningCount += 1;
        session.warnings.push(reason);
        el('warnings').textContent = `Warnings: ${{session.warningCount}} / ${{session.config.maxWarnings}}`;
        alert(`Warning ${{session.warningCount}}/${{session.config.maxWarnings}}: ${{reason}}`);
        return true;
      }}

      function registerSuspicion(session, reason) {{
        if (session.state !== 'ACTIVE') return;
        if (addWarning(session, reason) && session.warningCount >= session.config.maxWarnings) {{
          finishExam(session, 'Exam ended because you violated exam rules multiple times.');
        }}
      }}

      function renderQuestion(session) {{
        const index = session.currentIndex;
        const q = session.questions[index];
        el('questionText').textContent = `${{index + 1}}. ${{q.question}}`;
        el('options').innerHTML = '';
        const selected = session.answers[index] ? session.answers[index].selectedOption : null;
        q.options.forEach((opt, i) => {{
          const letter = LETTERS[i];
          const label = document.createElement('label');
          label.className = 'option-item';
          const input = document.createElement('input');
          input.type = 'radio';
          input.name = 'option';
          input.value = letter;
          input.checked = selected === letter;
          input.addEventListener('change', () => {{
            session.answers[index] = {{ questionId: q.id, selectedOption: letter }};
          }});
          const span = document.createElement('span');
          span.textContent = `${{letter}}. ${{opt}}`;
          label.appendChild(input);
          label.appendChild(span);
          el('options').appendChild(label);
        }});
        el('questionProgress').textContent = `Question ${{index + 1}} of ${{session.questions.length}}`;
        el('prevBtn').disabled = index === 0;
        el('nextBtn').disabled = index === session.questions.length - 1;
      }}

      function startTimer(session) {{
        el('timer').textContent = `Time left: ${{formatTime(session.remainingSeconds)}}`;
        session.timerHandle = setInterval(() => {{
          session.remainingSeconds -= 1;
          if (session.remainingSeconds <= 0) {{
            session.remainingSeconds = 0;
            el('timer').textContent = 'Time left: 00:00';
            finishExam(session, 'Time is over. The test has been submitted automatically.');
            return;
          }}
          el('timer').textContent = `Time left: ${{formatTime(session.remainingSeconds)}}`;
        }}, 1000);
      }}

      function showResult(text) {{
        el('examSection').classList.add('hidden');
        el('resultSection').classList.remove('hidden');
        el('resultText').textContent = text;
      }}

      async function finishExam(session, reasonMessage) {{
        if (session.state === 'FINISHING' || session.state === 'FINISHED') return;
        session.state = 'FINISHING';
        if (session.timerHandle) {{
          clearInterval(session.timerHandle);
          session.timerHandle = null;
        }}
        try {{
          const res = await fetch('/api/submit', {{
            method: 'POST',
            headers: {{ 'Content-Type': 'application/json' }},
            body: JSON.stringify({{
              userName: session.userName,
              email: session.userEmail,
              answers: session.answers.filter(Boolean),
              warnings: session.warnings,
            }}),
          }});
          if (!res.ok) throw new Error('Failed to submit exam');
          const data = await res.json();
          showResult(`${{reasonMessage}}\\n\\nYou answered ${{data.correct}} out of ${{data.total}} questions correctly (${{data.percentage}}%).`);
        }} catch (err) {{
          console.error(err);
          showResult('There was an error submitting your exam. Please contact the administrator.');
        }} finally {{
          session.state = 'FINISHED';
          sessionStorage.removeItem('examUserName');
          sessionStorage.removeItem('examUserEmail');
        }}
      }}

      async function startWebcam(session) {{
        if (!navigator.mediaDevices || !navigator.mediaDevices.getUserMedia) {{
          el('webcamStatus').textContent = 'Webcam not supported in this browser. Exam cannot start.';
          return false;
        }}
        try {{
          const stream = await navigator.mediaDevices.getUserMedia({{ video: true }});
          el('webcamVideo').srcObject = stream;
          el('webcamStatus').textContent = 'Webcam is active. Stay in frame.';
          stream.getVideoTracks().forEach((track) => {{
            track.addEventListener('ended', () => {{
              el('webcamStatus').textContent = 'Webcam stopped.';
              if (session.state === 'ACTIVE') {{
                finishExam(session, 'Exam ended because the webcam stopped.');
              }}
            }});
          }});
          return true;
        }} catch (err) {{
          console.error('Webcam error', err);
          el('webcamStatus').textContent = 'Webcam permission denied. Exam cannot start.';
          return false;
        }}
      }}

      async function startExam(session) {{
        const config = session.config;
        if (session.state !== 'DEVICE_CHECK') return;
        if (!isDeviceSupported()) {{
          el('deviceBlocker').classList.remove('hidden');
          if (config.deviceWarning && !session.deviceWarningRaised) {{
            session.deviceWarningRaised = true;
            addWarning(session, 'Attempted to start exam on mobile/small screen. Please use a laptop/desktop.');
          }}
          return;
        }}
        el('deviceBlocker').classList.add('hidden');

        session.state = 'LOADING';
        try {{
          const data = await fetchJson('/api/questions');
          session.questions = data.questions || [];
          session.answers = new Array(session.questions.length).fill(null);
        }} catch (err) {{
          console.error(err);
          alert('Error loading questions. Please try again later.');
          return;
        }}
        if (!session.questions.length) {{
          alert('No questions configured. Please contact admin.');
          return;
        }}

        if (config.webcamRequired && !(await startWebcam(session))) {{
          alert('You must allow webcam access to start the exam. Reload the page and allow access.');
          return;
        }}

        session.state = 'ACTIVE';
        el('examSection').classList.remove('hidden');
        el('warnings').textContent = `Warnings: ${{session.warningCount}} / ${{config.maxWarnings}}`;
        startTimer(session);
        renderQuestion(session);
        if (session.warningCount >= config.maxWarnings) {{
          finishExam(session, 'Exam ended because you violated exam rules multiple times.');
        }}
      }}

      async function fetchJson(url) {{
        const res = await fetch(url);
        if (!res.ok) throw new Error(`Request to ${{url}} failed`);
        return res.json();
      }}

      (async () => {{
        const userName = sessionStorage.getItem('examUserName');
        const userEmail = sessionStorage.getItem('examUserEmail');
        if (!userName || !userEmail) {{
          window.location.href = '/';
          return;
        }}
        el('userInfo').textContent = `${{userName}} (${{userEmail}})`;

        let config;
        try {{
          config = await fetchJson('/api/exam/config');
        }} catch (err) {{
          console.error(err);
          alert('Error loading questions. Please try again later.');
          return;
        }}
        const session = createSession(userName, userEmail, config);

        document.addEventListener('visibilitychange', () => {{
          if (document.hidden) registerSuspicion(session, 'You switched tabs or minimized the window.');
        }});
        window.addEventListener('blur', () => {{
          registerSuspicion(session, 'Window lost focus (possible tab switch or app change).');
        }});
        window.addEventListener('resize', () => {{
          if (session.state !== 'DEVICE_CHECK') return;
          el('deviceBlocker').classList.toggle('hidden', isDeviceSupported());
          if (isDeviceSupported()) startExam(session);
        }});
        el('prevBtn').addEventListener('click', () => {{
          if (session.state === 'ACTIVE' && session.currentIndex > 0) {{
            session.currentIndex -= 1;
            renderQuestion(session);
          }}
        }});
        el('nextBtn').addEventListener('click', () => {{
          if (session.state === 'ACTIVE' && session.currentIndex < session.questions.length - 1) {{
            session.currentIndex += 1;
            renderQuestion(session);
          }}
        }});
        el('submitBtn').addEventListener('click', () => {{
          if (session.state === 'ACTIVE' && confirm('Are you sure you want to submit the test now?')) {{
            finishExam(session, 'You submitted the test.');
          }}
        }});

        startExam(session);
      }})();
    </script>
  </body>
</html>
"""

ADMIN_PAGE_HTML = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>SecureExam - Admin</title>
    <meta name="robots" content="noindex, nofollow" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>{_BASE_STYLE}
      body {{ user-select: text; }}
      .row {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 0.5rem; }}
      textarea {{ width: 100%; min-height: 4rem; }}
    </style>
  </head>
  <body>
    <section id="adminLoginSection" class="card">
      <h1>Admin login</h1>
      <input id="adminPassword" type="password" placeholder="Password" />
      <button id="adminLoginBtn" class="primary-btn">Log in</button>
    </section>
    <section id="adminPanelSection" class="hidden">
      <div class="card">
        <button id="adminLogoutBtn" class="secondary-btn">Log out</button>
      </div>
      <div class="card">
        <h2>Question</h2>
        <form id="questionForm">
          <input id="questionId" type="hidden" />
          <label for="questionInput">Question text</label>
          <textarea id="questionInput"></textarea>
          <div class="row">
            <input id="optA" placeholder="Option A" />
            <input id="optB" placeholder="Option B" />
            <input id="optC" placeholder="Option C" />
            <input id="optD" placeholder="Option D" />
          </div>
          <label for="correctOption">Correct option</label>
          <select id="correctOption">
            <option value="">Select…</option>
            <option>A</option><option>B</option><option>C</option><option>D</option>
          </select>
          <p>
            <button type="submit" class="primary-btn">Save question</button>
            <button type="button" id="resetFormBtn" class="secondary-btn">Reset</button>
          </p>
        </form>
      </div>
      <div class="card">
        <h2>Questions</h2>
        <table id="questionsTable">
          <thead><tr><th>#</th><th>Question</th><th>Correct</th><th></th></tr></thead>
          <tbody></tbody>
        </table>
      </div>
      <div class="card">
        <h2>Results</h2>
        <table id="resultsTable">
          <thead><tr><th>#</th><th>Name</th><th>Email</th><th>Score</th><th>%</th><th>Warnings</th><th>Submitted</th></tr></thead>
          <tbody></tbody>
        </table>
      </div>
    </section>
    <script>
      const el = (id) => document.getElementById(id);
      const optionInputs = ['optA', 'optB', 'optC', 'optD'].map(el);

      async function api(url, options = {{}}) {{
        const res = await fetch(url, {{ headers: {{ 'Content-Type': 'application/json' }}, ...options }});
        const body = await res.json().catch(() => ({{}}));
        if (!res.ok) throw new Error(body.detail || `Request failed (${{res.status}})`);
        return body;
      }}

      function cell(text) {{
        const td = document.createElement('td');
        td.textContent = text;
        return td;
      }}

      function showPanel(loggedIn) {{
        el('adminLoginSection').classList.toggle('hidden', loggedIn);
        el('adminPanelSection').classList.toggle('hidden', !loggedIn);
      }}

      function clearForm() {{
        el('questionId').value = '';
        el('questionInput').value = '';
        optionInputs.forEach((input) => (input.value = ''));
        el('correctOption').value = '';
      }}

      function fillForm(q) {{
        el('questionId').value = q.id;
        el('questionInput').value = q.question;
        optionInputs.forEach((input, i) => (input.value = q.options[i] || ''));
        el('correctOption').value = q.correct || '';
      }}

      async function renderQuestions() {{
        const {{ questions }} = await api('/api/admin/questions');
        const tbody = document.querySelector('#questionsTable tbody');
        tbody.innerHTML = '';
        questions.forEach((q, index) => {{
          const tr = document.createElement('tr');
          tr.append(cell(index + 1), cell(q.question), cell(q.correct));
          const actions = document.createElement('td');
          const edit = document.createElement('button');
          edit.textContent = 'Edit';
          edit.className = 'secondary-btn';
          edit.addEventListener('click', () => fillForm(q));
          const del = document.createElement('button');
          del.textContent = 'Delete';
          del.className = 'secondary-btn';
          del.addEventListener('click', async () => {{
            if (!confirm('Delete this question?')) return;
            try {{
              await api(`/api/admin/questions/${{q.id}}`, {{ method: 'DELETE' }});
              await renderQuestions();
            }} catch (err) {{
              alert(err.message);
            }}
          }});
          actions.append(edit, del);
          tr.appendChild(actions);
          tbody.appendChild(tr);
        }});
      }}

      async function renderResults() {{
        const {{ results }} = await api('/api/admin/results');
        const tbody = document.querySelector('#resultsTable tbody');
        tbody.innerHTML = '';
        results.forEach((r, index) => {{
          const tr = document.createElement('tr');
          tr.append(
            cell(index + 1),
            cell(r.userName),
            cell(r.email),
            cell(`${{r.correct}}/${{r.total}}`),
            cell(`${{r.percentage}}%`),
            cell((r.warnings || []).length),
            cell(new Date(r.submittedAt).toLocaleString()),
          );
          tbody.appendChild(tr);
        }});
      }}

      async function refreshPanel() {{
        try {{
          await Promise.all([renderQuestions(), renderResults()]);
          showPanel(true);
        }} catch (err) {{
          showPanel(false);
        }}
      }}

      el('adminLoginBtn').addEventListener('click', async () => {{
        try {{
          await api('/api/admin/login', {{ method: 'POST', body: JSON.stringify({{ password: el('adminPassword').value }}) }});
          el('adminPassword').value = '';
          await refreshPanel();
        }} catch (err) {{
          alert('Invalid admin password.');
        }}
      }});

      el('adminLogoutBtn').addEventListener('click', async () => {{
        try {{
          await api('/api/admin/logout', {{ method: 'POST' }});
        }} catch (err) {{
          console.error(err);
        }}
        showPanel(false);
      }});

      el('questionForm').addEventListener('submit', async (e) => {{
        e.preventDefault();
        const payload = {{
          question: el('questionInput').value.trim(),
          options: optionInputs.map((input) => input.value.trim()),
          correct: el('correctOption').value.trim().toUpperCase(),
        }};
        if (!payload.question || payload.options.some((opt) => !opt)) {{
          alert('Please fill in all question and option fields.');
          return;
        }}
        if (!['A', 'B', 'C', 'D'].includes(payload.correct)) {{
          alert('Correct option must be one of A, B, C, or D.');
          return;
        }}
        const id = el('questionId').value;
        try {{
          await api(id ? `/api/admin/questions/${{id}}` : '/api/admin/questions', {{
            method: id ? 'PUT' : 'POST',
            body: JSON.stringify(payload),
          }});
          clearForm();
          await renderQuestions();
        }} catch (err) {{
          alert(`Error saving question: ${{err.message}}`);
        }}
      }});

      el('resetFormBtn').addEventListener('click', clearForm);
      refreshPanel();
    </script>
  </body>
</html>
"""
